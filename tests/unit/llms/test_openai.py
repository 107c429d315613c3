# tests/unit/llms/test_openai.py

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from openai import OpenAIError
from pydantic import BaseModel

from unillm.content import AudioPart, Content, ImagePart, TextPart, UnsupportedPartError
from unillm.llms.base import Message, Role
from unillm.llms.openai import OpenAILLMClient
from unillm.tools.tool import Tool


class WeatherInput(BaseModel):
    city: str


@pytest.fixture
def mock_openai_response() -> MagicMock:
    """Create a mock OpenAI response."""
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = "Hello! How can I help you?"
    response.choices[0].message.tool_calls = None
    response.choices[0].finish_reason = "stop"
    response.usage.prompt_tokens = 10
    response.usage.completion_tokens = 8
    response.usage.total_tokens = 18
    return response


def _tool_response(arguments: str) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = None
    response.choices[0].finish_reason = "tool_calls"

    tool_call = MagicMock()
    tool_call.id = "call_123"
    tool_call.function.name = "get_weather"
    tool_call.function.arguments = arguments

    response.choices[0].message.tool_calls = [tool_call]
    response.usage.prompt_tokens = 15
    response.usage.completion_tokens = 12
    response.usage.total_tokens = 27
    return response


def _client_returning(mock_openai: MagicMock, response: MagicMock) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.chat.completions.create.return_value = response
    mock_openai.return_value = mock_client
    return mock_client


class TestOpenAILLMClient:
    @pytest.mark.asyncio
    async def test_complete_basic(self, mock_openai_response: MagicMock) -> None:
        """Test basic completion without tools."""
        with patch("unillm.llms.openai.AsyncOpenAI") as mock_openai:
            _client_returning(mock_openai, mock_openai_response)

            client = OpenAILLMClient(api_key="test-key", model="gpt-4o")
            response = await client.complete(
                messages=[Message(role=Role.USER, content="Hello!")]
            )

            assert response.content == "Hello! How can I help you?"
            assert response.finish_reason == "stop"
            assert response.tool_calls == []
            assert response.usage.total_tokens == 18
            assert response.latency_ms >= 0

    @pytest.mark.asyncio
    async def test_complete_with_tools(self) -> None:
        """Test completion with tool calls."""
        with patch("unillm.llms.openai.AsyncOpenAI") as mock_openai:
            mock_client = _client_returning(mock_openai, _tool_response('{"city": "Tokyo"}'))

            client = OpenAILLMClient(api_key="test-key")

            tool = Tool(
                name="get_weather",
                description="Get weather for a city",
                input_schema=WeatherInput,
            )

            response = await client.complete(
                messages=[Message(role=Role.USER, content="What's the weather?")],
                tools=[tool],
            )

            assert response.content is None
            assert response.finish_reason == "tool_calls"
            assert len(response.tool_calls) == 1
            assert response.tool_calls[0].id == "call_123"
            assert response.tool_calls[0].name == "get_weather"
            assert response.tool_calls[0].arguments == {"city": "Tokyo"}

            sent_tools = mock_client.chat.completions.create.call_args.kwargs["tools"]
            assert sent_tools[0]["function"]["name"] == "get_weather"

    def test_message_conversion(self) -> None:
        """Test message conversion to OpenAI format."""
        with patch("unillm.llms.openai.AsyncOpenAI"):
            client = OpenAILLMClient(api_key="test-key")

            messages = [
                Message(role=Role.SYSTEM, content="You are helpful."),
                Message(role=Role.USER, content="Hello"),
                Message(role=Role.ASSISTANT, content="Hi there!"),
                Message(role=Role.TOOL, content="Result", tool_call_id="call_123"),
            ]

            converted = client._convert_messages(messages)

            assert converted[0] == {"role": "system", "content": "You are helpful."}
            assert converted[1] == {"role": "user", "content": "Hello"}
            assert converted[2] == {"role": "assistant", "content": "Hi there!"}
            assert converted[3] == {
                "role": "tool",
                "content": "Result",
                "tool_call_id": "call_123",
            }

    def test_multimodal_content_conversion(self) -> None:
        """Test that images and audio become OpenAI content parts."""
        with patch("unillm.llms.openai.AsyncOpenAI"):
            client = OpenAILLMClient(api_key="test-key")

            content = Content(
                parts=(
                    TextPart(text="Transcribe and describe"),
                    ImagePart(url="https://ex.com/a.png"),
                    AudioPart(data="UklGRg==", format="wav"),
                )
            )

            converted = client._convert_messages([Message(role=Role.USER, content=content)])

            assert converted[0]["content"] == [
                {"type": "text", "text": "Transcribe and describe"},
                {"type": "image_url", "image_url": {"url": "https://ex.com/a.png"}},
                {"type": "input_audio", "input_audio": {"data": "UklGRg==", "format": "wav"}},
            ]

    def test_empty_content_sent_as_empty_string(self) -> None:
        with patch("unillm.llms.openai.AsyncOpenAI"):
            client = OpenAILLMClient(api_key="test-key")

            converted = client._convert_messages([Message(role=Role.USER, content=Content())])

            assert converted[0] == {"role": "user", "content": ""}

    @pytest.mark.asyncio
    async def test_metrics_hook_called(self, mock_openai_response: MagicMock) -> None:
        """Test that metrics hook is called."""
        with patch("unillm.llms.openai.AsyncOpenAI") as mock_openai:
            _client_returning(mock_openai, mock_openai_response)

            metrics_hook = MagicMock()
            client = OpenAILLMClient(api_key="test-key", metrics_hook=metrics_hook)

            await client.complete(messages=[Message(role=Role.USER, content="Hi")])

            metrics_hook.record_latency.assert_called_once()
            call_args = metrics_hook.record_latency.call_args
            assert call_args[0][0] == "llm_completion_duration"
            metrics_hook.increment.assert_any_call("llm_tokens_total", 18)

    @pytest.mark.asyncio
    async def test_malformed_tool_arguments_handled(self) -> None:
        """Test that malformed JSON in tool arguments is handled gracefully."""
        with patch("unillm.llms.openai.AsyncOpenAI") as mock_openai:
            _client_returning(mock_openai, _tool_response("invalid json"))

            client = OpenAILLMClient(api_key="test-key")
            result = await client.complete(
                messages=[Message(role=Role.USER, content="test")]
            )

            # Should not raise, arguments should be empty dict
            assert result.tool_calls[0].arguments == {}

    def test_text_only_system_content_collapses_to_string(self) -> None:
        with patch("unillm.llms.openai.AsyncOpenAI"):
            client = OpenAILLMClient(api_key="test-key")

            system = Content(parts=(TextPart(text="Be brief."),))
            converted = client._convert_messages([Message(role=Role.SYSTEM, content=system)])

            assert converted[0] == {"role": "system", "content": "Be brief."}

    @pytest.mark.asyncio
    async def test_multimodal_system_message_rejected_before_request(self) -> None:
        with patch("unillm.llms.openai.AsyncOpenAI") as mock_openai:
            mock_client = AsyncMock()
            mock_openai.return_value = mock_client

            client = OpenAILLMClient(api_key="test-key")
            system = Content(
                parts=(TextPart(text="Style guide:"), ImagePart(url="https://ex.com/a.png"))
            )

            with pytest.raises(UnsupportedPartError, match="system messages accept text only"):
                await client.complete(
                    messages=[
                        Message(role=Role.SYSTEM, content=system),
                        Message(role=Role.USER, content="Hi"),
                    ]
                )

            mock_client.chat.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_error_counted_and_raised(self) -> None:
        with patch("unillm.llms.openai.AsyncOpenAI") as mock_openai:
            mock_client = AsyncMock()
            mock_client.chat.completions.create.side_effect = OpenAIError("connection lost")
            mock_openai.return_value = mock_client

            metrics_hook = MagicMock()
            client = OpenAILLMClient(
                api_key="test-key", max_retries=1, metrics_hook=metrics_hook
            )

            with pytest.raises(OpenAIError):
                await client.complete(messages=[Message(role=Role.USER, content="Hi")])

            metrics_hook.increment.assert_called_once_with(
                "llm_errors_total", labels={"provider": "openai", "model": "gpt-4o"}
            )
            metrics_hook.record_latency.assert_not_called()
