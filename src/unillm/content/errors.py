# src/unillm/content/errors.py

"""Errors raised while building or serializing message content.

Every attachment error names the attachment kind and the source that failed,
so callers can fix their attachment list.
"""


class ContentError(Exception):
    """Base class for content normalization errors."""


class AttachmentError(ContentError):
    def __init__(self, message: str, *, kind: str, source: str) -> None:
        super().__init__(f"{message} ({kind} attachment: {source!r})")
        self.kind = kind
        self.source = source


class AttachmentReadError(AttachmentError):
    """Local attachment is missing or unreadable."""


class AttachmentFetchError(AttachmentError):
    """Remote attachment could not be downloaded."""


class UnsupportedSourceError(AttachmentError):
    """Attachment source is empty, malformed, or cannot be encoded."""


class UnsupportedPartError(ContentError):
    """A provider serializer cannot express the given content part."""
