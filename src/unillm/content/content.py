# src/unillm/content/content.py

import logging
import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from time import monotonic
from typing import Any, Union

from unillm.observability import names
from unillm.observability.base import MetricsHook, NoOpMetricsHook

from .encoder import encode_audio, encode_image
from .errors import ContentError
from .parts import ContentPart, TextPart
from .resolver import AttachmentResolver, Source, resolve_source

logger = logging.getLogger(__name__)

SourceList = Union[Source, Sequence[Source]]
Attachments = Mapping[str, SourceList]

# Build order: text first, then images, then audio
ATTACHMENT_KINDS = ("image", "audio")

_ENCODERS = {
    "image": encode_image,
    "audio": encode_audio,
}


def _as_sources(value: SourceList | None) -> list[Source]:
    if value is None:
        return []
    # A single path or URL is one source, never a sequence of characters
    if isinstance(value, (str, os.PathLike)):
        return [value]
    return list(value)


def _encode_all(
    kind: str,
    sources: SourceList | None,
    resolver: AttachmentResolver,
    metrics_hook: MetricsHook,
) -> list[ContentPart]:
    parts: list[ContentPart] = []
    encode = _ENCODERS[kind]
    for source in _as_sources(sources):
        try:
            part = encode(resolve_source(source, kind), resolver)
        except ContentError:
            metrics_hook.increment(
                names.CONTENT_ATTACHMENT_ERRORS_TOTAL, labels={"kind": kind}
            )
            raise
        parts.append(part)
        metrics_hook.increment(names.CONTENT_ATTACHMENTS_TOTAL, labels={"kind": kind})
        logger.debug("Attached %s from %s", kind, source)
    return parts


@dataclass(frozen=True)
class Content:
    """Ordered, immutable multimodal message content.

    Holds zero or more parts: an optional text part, then images, then audio.
    Created per outgoing message and discarded once serialized.
    """

    parts: tuple[ContentPart, ...] = ()

    @classmethod
    def build(
        cls,
        text: str | None = None,
        attachments: Attachments | None = None,
        *,
        resolver: AttachmentResolver | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> "Content":
        """Build content from text plus image/audio attachment sources.

        Attachments are resolved one at a time, in order. Any failure aborts
        the whole build.

        Args:
            text: Message text. None or "" adds no text part.
            attachments: {"image": ..., "audio": ...}, each a single source or
                a sequence of sources (local paths or http(s) URLs).
            resolver: Loads attachment bytes. Defaults to a resolver that
                fetches remote audio over HTTP and is closed after the build;
                a passed-in resolver is left open.
            metrics_hook: Optional metrics hook for observability.

        Returns:
            The built Content.

        Raises:
            ValueError: If attachments contain an unknown kind.
            AttachmentReadError: If a local file cannot be read.
            AttachmentFetchError: If a remote audio download fails.
            UnsupportedSourceError: If a source is empty or malformed.
        """
        attachments = attachments or {}
        unknown = set(attachments) - set(ATTACHMENT_KINDS)
        if unknown:
            kinds = ", ".join(sorted(unknown))
            raise ValueError(f"Unknown attachment kind(s): {kinds}")

        start = monotonic()
        parts: list[ContentPart] = []

        if text:
            parts.append(TextPart(text=text))

        owned = resolver is None
        resolver = resolver or AttachmentResolver()
        try:
            for kind in ATTACHMENT_KINDS:
                parts.extend(
                    _encode_all(kind, attachments.get(kind), resolver, metrics_hook)
                )
        finally:
            if owned:
                resolver.close()

        elapsed_ms = 1000 * (monotonic() - start)
        metrics_hook.record_latency(names.CONTENT_BUILD_DURATION, elapsed_ms)
        return cls(parts=tuple(parts))

    def __bool__(self) -> bool:
        return bool(self.parts)

    @property
    def text_only(self) -> bool:
        return len(self.parts) == 1 and isinstance(self.parts[0], TextPart)

    @property
    def text(self) -> str | None:
        """The text of the text part, if any."""
        for part in self.parts:
            if isinstance(part, TextPart):
                return part.text
        return None

    def to_parts(self) -> tuple[ContentPart, ...] | None:
        """Canonical part sequence, or None when there are no parts."""
        if not self.parts:
            return None
        return self.parts

    def format(
        self, serializer: Callable[[ContentPart], dict[str, Any]]
    ) -> str | list[dict[str, Any]] | None:
        """Shape content for a provider that accepts a bare string for text.

        Returns the bare text for a single text part, None when empty, and
        otherwise one serialized dict per part.
        """
        parts = self.to_parts()
        if parts is None:
            return None
        if self.text_only:
            return self.text
        return [serializer(part) for part in parts]


def build_content(
    text: str | None = None,
    attachments: Attachments | None = None,
    *,
    resolver: AttachmentResolver | None = None,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> Content:
    """Build a Content. See Content.build."""
    return Content.build(
        text, attachments, resolver=resolver, metrics_hook=metrics_hook
    )


def to_wire_parts(content: Content) -> tuple[ContentPart, ...] | None:
    """Canonical parts of content, or None when empty. See Content.to_parts."""
    return content.to_parts()
