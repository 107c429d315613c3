# src/unillm/content/encoder.py

"""Turns resolved attachments into content parts.

Images keep remote URLs as references; audio is always inlined, remote or
local. Type metadata comes from the file extension only.
"""

import base64
import posixpath
from os import path
from urllib.parse import urlsplit

from .errors import UnsupportedSourceError
from .parts import AudioPart, ImagePart
from .resolver import AttachmentResolver, ResolvedSource

DEFAULT_AUDIO_FORMAT = "wav"


def encode_base64(data: bytes) -> str:
    """Standard alphabet, padded, no line breaks (RFC 4648)."""
    return base64.b64encode(data).decode("ascii")


def extension_of(resolved: ResolvedSource) -> str:
    """Extension without the dot, or "" when there is none.

    For URLs only the path component counts, so query strings and fragments
    never leak into the extension.
    """
    if resolved.remote:
        ext = posixpath.splitext(urlsplit(resolved.location).path)[1]
    else:
        ext = path.splitext(resolved.location)[1]
    return ext.lstrip(".")


def mime_type_for(resolved: ResolvedSource) -> str:
    ext = extension_of(resolved)
    if not ext:
        raise UnsupportedSourceError(
            "Cannot infer image type from a path without extension",
            kind=resolved.kind,
            source=resolved.original,
        )
    return f"image/{ext}"


def audio_format_for(resolved: ResolvedSource) -> str:
    return extension_of(resolved) or DEFAULT_AUDIO_FORMAT


def encode_image(resolved: ResolvedSource, resolver: AttachmentResolver) -> ImagePart:
    if resolved.remote:
        return ImagePart(url=resolved.location)

    media_type = mime_type_for(resolved)
    return ImagePart(data=encode_base64(resolver.read(resolved)), media_type=media_type)


def encode_audio(resolved: ResolvedSource, resolver: AttachmentResolver) -> AudioPart:
    return AudioPart(
        data=encode_base64(resolver.read(resolved)),
        format=audio_format_for(resolved),
    )
