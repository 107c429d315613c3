# src/unillm/content/__init__.py

"""Multimodal content normalization.

Builds provider-agnostic message content from text plus image/audio
attachments, then shapes it for a provider's wire format.

Example:
    >>> from unillm.content import build_content, part_to_openai
    >>>
    >>> content = build_content(
    ...     "Describe this",
    ...     {"image": "https://example.com/a.png", "audio": "clip.mp3"},
    ... )
    >>> payload = content.format(part_to_openai)
"""

from .config import FetchConfig
from .content import Attachments, Content, build_content, to_wire_parts
from .errors import (
    AttachmentError,
    AttachmentFetchError,
    AttachmentReadError,
    ContentError,
    UnsupportedPartError,
    UnsupportedSourceError,
)
from .formats import get_part_serializer, part_to_anthropic, part_to_openai
from .parts import AudioPart, ContentPart, ImagePart, TextPart
from .resolver import AttachmentResolver, Fetcher, HttpFetcher, is_remote

__all__ = [
    # Builder
    "build_content",
    "to_wire_parts",
    "Content",
    "Attachments",
    # Parts
    "ContentPart",
    "TextPart",
    "ImagePart",
    "AudioPart",
    # Resolution
    "AttachmentResolver",
    "Fetcher",
    "HttpFetcher",
    "FetchConfig",
    "is_remote",
    # Serializers
    "get_part_serializer",
    "part_to_openai",
    "part_to_anthropic",
    # Errors
    "ContentError",
    "AttachmentError",
    "AttachmentReadError",
    "AttachmentFetchError",
    "UnsupportedSourceError",
    "UnsupportedPartError",
]
