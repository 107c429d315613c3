# src/unillm/llms/base.py

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Protocol

from unillm.content import AttachmentResolver, Attachments, Content
from unillm.observability.base import MetricsHook
from unillm.tools.tool import Tool


class Role(str, Enum):
    """Message role in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True)
class Message:
    """One conversation turn: plain text or multimodal Content."""

    role: Role
    content: str | Content
    tool_call_id: str | None = None  # set on TOOL messages


def user_message(
    text: str | None,
    attachments: Attachments | None = None,
    *,
    resolver: AttachmentResolver | None = None,
) -> Message:
    """Build a user message, resolving image/audio attachments eagerly."""
    if not attachments:
        return Message(role=Role.USER, content=text or "")
    content = Content.build(text, attachments, resolver=resolver)
    return Message(role=Role.USER, content=content)


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by the model, with parsed arguments."""

    id: str
    name: str
    arguments: dict[str, Any]


@dataclass(frozen=True)
class Usage:
    """Token usage for a completion."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True)
class LLMResponse:
    """Provider-neutral result of one completion call."""

    content: str | None
    tool_calls: list[ToolCall]
    finish_reason: Literal["stop", "tool_calls", "length", "error"]
    usage: Usage
    latency_ms: float


class LLMClient(Protocol):
    """What every provider adapter exposes."""

    metrics_hook: MetricsHook

    async def complete(
        self,
        *,
        messages: list[Message],
        tools: list[Tool] | None = None,
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Run one completion over the full conversation.

        Args:
            messages: Complete conversation history, text or multimodal.
            tools: Optional list of tools the model can call.
            temperature: Sampling temperature (0.0 = deterministic).
            max_tokens: Maximum tokens in response.

        Returns:
            The provider-neutral response.

        Raises:
            UnsupportedPartError: If a message holds a part the provider
                cannot express, or a system message holds more than text.
            The provider SDK error once retries are exhausted.
        """
        ...
