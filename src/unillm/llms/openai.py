# src/unillm/llms/openai.py

import json
import logging
from typing import Any, Literal

from openai import NOT_GIVEN, AsyncOpenAI, OpenAIError

from unillm.observability.base import MetricsHook, NoOpMetricsHook
from unillm.tools.tool import Tool

from ._client import ChatClient
from ._tool_schema import tools_to_openai_schema
from .base import LLMResponse, Message, Role, ToolCall, Usage

logger = logging.getLogger(__name__)

_FINISH_REASONS: dict[str | None, Literal["stop", "length"]] = {
    "stop": "stop",
    "length": "length",
}


class OpenAILLMClient(ChatClient):
    """Chat completions adapter.

    Images travel as image_url parts and audio as input_audio parts.
    """

    provider = "openai"
    retry_on = (OpenAIError,)

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o",
        timeout: float = 30.0,
        max_retries: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        super().__init__(model, max_retries, metrics_hook)
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        logger.info("OpenAI client ready: model=%s, timeout=%s", model, timeout)

    def _build_request(
        self,
        messages: list[Message],
        tools: list[Tool] | None,
        temperature: float,
        max_tokens: int | None,
    ) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": self._convert_messages(messages),
            "temperature": temperature,
            "tools": tools_to_openai_schema(tools) if tools else NOT_GIVEN,
            "max_tokens": max_tokens or NOT_GIVEN,
        }

    async def _send(self, request: dict[str, Any]) -> Any:
        return await self._client.chat.completions.create(**request)

    def _convert_messages(self, messages: list[Message]) -> list[dict]:
        result = []
        for m in messages:
            if m.role == Role.SYSTEM:
                content: Any = self._system_text(m.content)
            else:
                content = self._format(m.content)
            msg: dict = {"role": m.role.value, "content": content}
            if m.tool_call_id:
                msg["tool_call_id"] = m.tool_call_id
            result.append(msg)
        return result

    def _normalize_response(self, raw: Any, latency_ms: float) -> LLMResponse:
        choice = raw.choices[0]
        tool_calls = [
            ToolCall(
                id=tc.id,
                name=tc.function.name,
                arguments=_parse_arguments(tc.function.arguments),
            )
            for tc in choice.message.tool_calls or []
        ]

        finish_reason: Literal["stop", "tool_calls", "length", "error"]
        if tool_calls:
            finish_reason = "tool_calls"
        else:
            finish_reason = _FINISH_REASONS.get(choice.finish_reason, "error")

        return LLMResponse(
            content=choice.message.content,
            tool_calls=tool_calls,
            finish_reason=finish_reason,
            usage=Usage(
                prompt_tokens=raw.usage.prompt_tokens,
                completion_tokens=raw.usage.completion_tokens,
                total_tokens=raw.usage.total_tokens,
            ),
            latency_ms=latency_ms,
        )


def _parse_arguments(raw_arguments: str) -> dict[str, Any]:
    try:
        return json.loads(raw_arguments)
    except json.JSONDecodeError:
        logger.warning("Unparseable tool call arguments: %s", raw_arguments)
        return {}
