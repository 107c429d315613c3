# src/unillm/llms/__init__.py

"""Provider adapters for chat completion.

Messages carry plain text or multimodal Content. Each adapter shapes content
with the part serializer registered for its provider, retries transport
errors only, and returns a provider-neutral LLMResponse.
"""

from .base import LLMClient, LLMResponse, Message, Role, ToolCall, Usage, user_message
from .config import LLMConfig
from .factory import create_llm_client

__all__ = [
    "create_llm_client",
    "LLMClient",
    "LLMConfig",
    "Message",
    "Role",
    "ToolCall",
    "LLMResponse",
    "Usage",
    "user_message",
]
