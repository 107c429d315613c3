# src/unillm/llms/_client.py

"""Request lifecycle shared by the provider adapters.

An adapter supplies three pieces: how to build the provider request from
messages, how to send it, and how to read the provider response back into an
LLMResponse. Timing, retries, metrics and content shaping live here.
"""

import logging
from time import monotonic
from typing import Any

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from unillm.content import Content, UnsupportedPartError, get_part_serializer
from unillm.observability import names
from unillm.observability.base import MetricsHook
from unillm.tools.tool import Tool

from .base import LLMResponse, Message

logger = logging.getLogger(__name__)


class ChatClient:
    provider: str
    # Transport errors for this provider; anything else is raised at once
    retry_on: tuple[type[BaseException], ...] = ()

    def __init__(self, model: str, max_retries: int, metrics_hook: MetricsHook):
        self._model = model
        self._max_retries = max_retries
        self._serialize = get_part_serializer(self.provider)
        self.metrics_hook = metrics_hook

    async def complete(
        self,
        *,
        messages: list[Message],
        tools: list[Tool] | None = None,
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        start = monotonic()
        request = self._build_request(messages, tools, temperature, max_tokens)

        logger.debug(
            "Calling %s: model=%s, messages=%d, tools=%d",
            self.provider,
            self._model,
            len(messages),
            len(tools) if tools else 0,
        )

        labels = {"provider": self.provider, "model": self._model}
        try:
            raw = await self._send_with_retries(request)
        except self.retry_on:
            self.metrics_hook.increment(names.LLM_ERRORS_TOTAL, labels=labels)
            raise

        elapsed_ms = 1000 * (monotonic() - start)
        response = self._normalize_response(raw, elapsed_ms)
        self._record(response, elapsed_ms, labels)

        logger.info(
            "%s completion: finish=%s, tokens=%d, latency=%.0fms",
            self.provider,
            response.finish_reason,
            response.usage.total_tokens,
            elapsed_ms,
        )
        return response

    async def _send_with_retries(self, request: dict[str, Any]) -> Any:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=retry_if_exception_type(self.retry_on),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._send(request)

    def _record(
        self, response: LLMResponse, elapsed_ms: float, labels: dict[str, str]
    ) -> None:
        usage = response.usage
        self.metrics_hook.record_latency(names.LLM_COMPLETION_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.LLM_REQUESTS_TOTAL, labels=labels)
        self.metrics_hook.increment(names.LLM_TOKENS_PROMPT, usage.prompt_tokens)
        self.metrics_hook.increment(
            names.LLM_TOKENS_COMPLETION, usage.completion_tokens
        )
        self.metrics_hook.increment(names.LLM_TOKENS_TOTAL, usage.total_tokens)

    def _format(self, content: str | Content) -> str | list[dict[str, Any]]:
        """Message body in the provider's shape. Empty content becomes ""."""
        if not isinstance(content, Content):
            return content
        formatted = content.format(self._serialize)
        return "" if formatted is None else formatted

    def _system_text(self, content: str | Content) -> str:
        if not isinstance(content, Content):
            return content
        if content and not content.text_only:
            raise UnsupportedPartError(
                f"{self.provider} system messages accept text only, "
                f"got {len(content.parts)} parts"
            )
        return content.text or ""

    def _build_request(
        self,
        messages: list[Message],
        tools: list[Tool] | None,
        temperature: float,
        max_tokens: int | None,
    ) -> dict[str, Any]:
        raise NotImplementedError

    async def _send(self, request: dict[str, Any]) -> Any:
        raise NotImplementedError

    def _normalize_response(self, raw: Any, latency_ms: float) -> LLMResponse:
        raise NotImplementedError
