# src/unillm/content/parts.py

from dataclasses import dataclass
from typing import Literal, Union


@dataclass(frozen=True)
class TextPart:
    """Plain text. Never empty."""

    text: str
    type: Literal["text"] = "text"

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("TextPart text must be non-empty")


@dataclass(frozen=True)
class ImagePart:
    """Image content, either a remote URL reference or an inline payload.

    Exactly one form is set:
    - url: the provider dereferences the URL itself
    - data + media_type: base64 bytes and their MIME type (e.g. image/png)
    """

    url: str | None = None
    data: str | None = None
    media_type: str | None = None
    type: Literal["image"] = "image"

    def __post_init__(self) -> None:
        inline = self.data is not None or self.media_type is not None
        if self.url is not None and inline:
            raise ValueError("ImagePart takes either url or data/media_type, not both")
        if self.url is None and (self.data is None or self.media_type is None):
            raise ValueError("ImagePart requires url, or both data and media_type")

    @property
    def is_remote(self) -> bool:
        return self.url is not None


@dataclass(frozen=True)
class AudioPart:
    """Inline audio. Always base64 bytes, never a URL reference."""

    data: str
    format: str
    type: Literal["audio"] = "audio"


ContentPart = Union[TextPart, ImagePart, AudioPart]
