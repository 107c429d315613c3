# src/unillm/llms/factory.py

import importlib

from unillm.observability.base import MetricsHook, NoOpMetricsHook

from .base import LLMClient
from .config import LLMConfig

# provider -> (adapter module, class). Modules load on first use so only the
# SDK for a configured provider is imported.
_ADAPTERS: dict[str, tuple[str, str]] = {
    "openai": (".openai", "OpenAILLMClient"),
    "anthropic": (".anthropic", "AnthropicLLMClient"),
}


def create_llm_client(
    config: LLMConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LLMClient:
    """Build the adapter registered for config.provider.

    Raises:
        ValueError: If no adapter is registered for the provider.
    """
    try:
        module_name, class_name = _ADAPTERS[config.provider]
    except KeyError:
        raise ValueError(f"Unknown LLM provider: {config.provider}") from None

    adapter = getattr(importlib.import_module(module_name, __package__), class_name)
    return adapter(
        api_key=config.api_key,
        model=config.model,
        timeout=config.timeout,
        max_retries=config.max_retries,
        metrics_hook=metrics_hook,
    )
