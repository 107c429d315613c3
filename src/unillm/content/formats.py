# src/unillm/content/formats.py

"""Provider-specific wire shapes for content parts.

Pure data transformation: one function per provider family. Adding a provider
means adding one function here and registering it, never touching the
content builder.
"""

from collections.abc import Callable
from typing import Any

from .errors import UnsupportedPartError
from .parts import AudioPart, ContentPart, ImagePart, TextPart

PartSerializer = Callable[[ContentPart], dict[str, Any]]


def part_to_openai(part: ContentPart) -> dict[str, Any]:
    """Convert a content part to OpenAI chat completions format.

    Inline images travel as data URLs inside an image_url block.
    """
    if isinstance(part, TextPart):
        return {"type": "text", "text": part.text}

    if isinstance(part, ImagePart):
        if part.is_remote:
            url = part.url
        else:
            url = f"data:{part.media_type};base64,{part.data}"
        return {"type": "image_url", "image_url": {"url": url}}

    if isinstance(part, AudioPart):
        return {
            "type": "input_audio",
            "input_audio": {"data": part.data, "format": part.format},
        }

    raise UnsupportedPartError(
        f"OpenAI cannot express part of type {type(part).__name__}"
    )


def part_to_anthropic(part: ContentPart) -> dict[str, Any]:
    """Convert a content part to Anthropic messages format.

    Anthropic has no audio block, so audio parts are rejected.
    """
    if isinstance(part, TextPart):
        return {"type": "text", "text": part.text}

    if isinstance(part, ImagePart):
        if part.is_remote:
            return {"type": "image", "source": {"type": "url", "url": part.url}}
        return {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": part.media_type,
                "data": part.data,
            },
        }

    raise UnsupportedPartError(
        f"Anthropic cannot express part of type {type(part).__name__}"
    )


_SERIALIZERS: dict[str, PartSerializer] = {
    "openai": part_to_openai,
    "anthropic": part_to_anthropic,
}


def get_part_serializer(provider: str) -> PartSerializer:
    try:
        return _SERIALIZERS[provider]
    except KeyError:
        raise ValueError(f"No content serializer for provider: {provider}")
