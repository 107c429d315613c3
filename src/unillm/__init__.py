# Content
from .content import (
    AttachmentFetchError,
    AttachmentReadError,
    AttachmentResolver,
    AudioPart,
    Content,
    ContentError,
    ContentPart,
    FetchConfig,
    HttpFetcher,
    ImagePart,
    TextPart,
    UnsupportedPartError,
    UnsupportedSourceError,
    build_content,
    part_to_anthropic,
    part_to_openai,
    to_wire_parts,
)

# LLMs
from .llms import (
    LLMClient,
    LLMConfig,
    LLMResponse,
    Message,
    Role,
    create_llm_client,
    user_message,
)

# Observability
from .observability import LoggingMetricsHook, MetricsHook, NoOpMetricsHook

# Tools
from .tools import Tool

__all__ = [
    # Content
    "AttachmentFetchError",
    "AttachmentReadError",
    "AttachmentResolver",
    "AudioPart",
    "Content",
    "ContentError",
    "ContentPart",
    "FetchConfig",
    "HttpFetcher",
    "ImagePart",
    "TextPart",
    "UnsupportedPartError",
    "UnsupportedSourceError",
    "build_content",
    "part_to_anthropic",
    "part_to_openai",
    "to_wire_parts",
    # LLMs
    "LLMClient",
    "LLMConfig",
    "LLMResponse",
    "Message",
    "Role",
    "create_llm_client",
    "user_message",
    # Observability
    "LoggingMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Tools
    "Tool",
]
