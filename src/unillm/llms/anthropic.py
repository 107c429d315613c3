# src/unillm/llms/anthropic.py

import logging
from typing import Any, Literal

from anthropic import NOT_GIVEN, APIError, AsyncAnthropic

from unillm.observability.base import MetricsHook, NoOpMetricsHook
from unillm.tools.tool import Tool

from ._client import ChatClient
from ._tool_schema import tools_to_anthropic_schema
from .base import LLMResponse, Message, Role, ToolCall, Usage

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 4096

_STOP_REASONS: dict[str | None, Literal["stop", "length"]] = {
    "end_turn": "stop",
    "stop_sequence": "stop",
    "max_tokens": "length",
}


class AnthropicLLMClient(ChatClient):
    """Messages API adapter.

    System messages go in the separate system parameter and must be text.
    Images travel as image blocks. Audio is rejected before any request is
    made, since the Messages API has no audio block.
    """

    provider = "anthropic"
    retry_on = (APIError,)

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-sonnet-4-20250514",
        timeout: float = 30.0,
        max_retries: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        super().__init__(model, max_retries, metrics_hook)
        self._client = AsyncAnthropic(api_key=api_key, timeout=timeout)
        logger.info("Anthropic client ready: model=%s, timeout=%s", model, timeout)

    def _build_request(
        self,
        messages: list[Message],
        tools: list[Tool] | None,
        temperature: float,
        max_tokens: int | None,
    ) -> dict[str, Any]:
        system, rest = self._extract_system(messages)
        return {
            "model": self._model,
            "messages": self._convert_messages(rest),
            "temperature": temperature,
            "max_tokens": max_tokens or DEFAULT_MAX_TOKENS,
            "system": system or NOT_GIVEN,
            "tools": tools_to_anthropic_schema(tools) if tools else NOT_GIVEN,
        }

    async def _send(self, request: dict[str, Any]) -> Any:
        return await self._client.messages.create(**request)

    def _extract_system(
        self, messages: list[Message]
    ) -> tuple[str | None, list[Message]]:
        """Split off the system prompt. The last system message wins."""
        system = None
        rest = []
        for m in messages:
            if m.role == Role.SYSTEM:
                system = self._system_text(m.content)
            else:
                rest.append(m)
        return system, rest

    def _convert_messages(self, messages: list[Message]) -> list[dict]:
        result = []
        for m in messages:
            content = self._format(m.content)
            if m.role == Role.TOOL:
                # Tool output is a user turn holding a tool_result block
                block = {
                    "type": "tool_result",
                    "tool_use_id": m.tool_call_id,
                    "content": content,
                }
                result.append({"role": "user", "content": [block]})
            else:
                result.append({"role": m.role.value, "content": content})
        return result

    def _normalize_response(self, raw: Any, latency_ms: float) -> LLMResponse:
        text = "".join(block.text for block in raw.content if block.type == "text")
        tool_calls = [
            ToolCall(
                id=block.id,
                name=block.name,
                arguments=block.input if isinstance(block.input, dict) else {},
            )
            for block in raw.content
            if block.type == "tool_use"
        ]

        finish_reason: Literal["stop", "tool_calls", "length", "error"]
        if tool_calls:
            finish_reason = "tool_calls"
        else:
            finish_reason = _STOP_REASONS.get(raw.stop_reason, "error")

        input_tokens = raw.usage.input_tokens
        output_tokens = raw.usage.output_tokens
        return LLMResponse(
            content=text or None,
            tool_calls=tool_calls,
            finish_reason=finish_reason,
            usage=Usage(
                prompt_tokens=input_tokens,
                completion_tokens=output_tokens,
                total_tokens=input_tokens + output_tokens,
            ),
            latency_ms=latency_ms,
        )
