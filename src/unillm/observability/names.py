# src/unillm/observability/names.py

"""Standard metric names for unillm observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
Units are handled by the metrics backend (e.g., converted to seconds in Prometheus).
"""

# ============================================================================
# LLM Metrics
# ============================================================================

# Duration
LLM_COMPLETION_DURATION = "llm_completion_duration"

# Counters
LLM_REQUESTS_TOTAL = "llm_requests_total"
LLM_ERRORS_TOTAL = "llm_errors_total"

# Counters (token usage - monotonic over time for cost/rate tracking)
LLM_TOKENS_PROMPT = "llm_tokens_prompt"
LLM_TOKENS_COMPLETION = "llm_tokens_completion"
LLM_TOKENS_TOTAL = "llm_tokens_total"


# ============================================================================
# Content Metrics
# ============================================================================

# Duration (includes file reads and remote fetches)
CONTENT_BUILD_DURATION = "content_build_duration"

# Counters (labelled by attachment kind)
CONTENT_ATTACHMENTS_TOTAL = "content_attachments_total"
CONTENT_ATTACHMENT_ERRORS_TOTAL = "content_attachment_errors_total"
