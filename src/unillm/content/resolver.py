# src/unillm/content/resolver.py

"""Attachment source classification and byte loading.

A source is either remote (an http/https URL) or a local filesystem path.
Local paths are made absolute before any read; remote bytes come from an
injected fetcher so callers and tests control the network boundary.
"""

import logging
import os
from dataclasses import dataclass
from typing import Protocol, Union

import httpx

from .config import FetchConfig
from .errors import AttachmentFetchError, AttachmentReadError, UnsupportedSourceError

logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike]

REMOTE_PREFIX = "http"


def is_remote(source: str) -> bool:
    """Literal, case-sensitive prefix test.

    Scheme-relative URLs ("//host/a.png") and mixed-case schemes ("HTTP://")
    are treated as local paths.
    """
    return source.startswith(REMOTE_PREFIX)


@dataclass(frozen=True)
class ResolvedSource:
    kind: str
    original: str
    location: str  # URL, or absolute local path
    remote: bool


def resolve_source(source: Source, kind: str) -> ResolvedSource:
    """Classify a source and make local paths absolute.

    Never touches the filesystem.

    Raises:
        UnsupportedSourceError: If the source is not a non-empty string or path.
    """
    if isinstance(source, os.PathLike):
        source = os.fspath(source)
    if not isinstance(source, str):
        raise UnsupportedSourceError(
            f"Unsupported source type {type(source).__name__}",
            kind=kind,
            source=repr(source),
        )
    if not source.strip():
        raise UnsupportedSourceError("Empty source", kind=kind, source=source)

    if is_remote(source):
        return ResolvedSource(kind=kind, original=source, location=source, remote=True)

    location = os.path.abspath(os.path.expanduser(source))
    return ResolvedSource(kind=kind, original=source, location=location, remote=False)


class Fetcher(Protocol):
    def __call__(self, url: str) -> bytes: ...


class HttpFetcher:
    """Blocking HTTP GET returning the raw response body.

    No retries. Raises httpx errors; the resolver wraps them.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        follow_redirects: bool = True,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or httpx.Client(
            timeout=timeout, follow_redirects=follow_redirects
        )

    @classmethod
    def from_config(cls, config: FetchConfig) -> "HttpFetcher":
        return cls(timeout=config.timeout, follow_redirects=config.follow_redirects)

    def __call__(self, url: str) -> bytes:
        response = self._client.get(url)
        response.raise_for_status()
        return response.content

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpFetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class AttachmentResolver:
    """Loads attachment bytes from local files or remote URLs.

    Closing the resolver closes the HttpFetcher it created for itself; an
    injected fetcher belongs to the caller and is left open.
    """

    def __init__(self, fetcher: Fetcher | None = None) -> None:
        self._fetcher = fetcher
        self._owned_fetcher: HttpFetcher | None = None

    @property
    def fetcher(self) -> Fetcher:
        # Created lazily so content without remote audio never opens a client
        if self._fetcher is None:
            self._owned_fetcher = HttpFetcher()
            self._fetcher = self._owned_fetcher
        return self._fetcher

    def close(self) -> None:
        if self._owned_fetcher is not None:
            self._owned_fetcher.close()
            self._owned_fetcher = None
            self._fetcher = None

    def __enter__(self) -> "AttachmentResolver":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def read(self, resolved: ResolvedSource) -> bytes:
        if resolved.remote:
            return self._fetch(resolved)
        return self._read_local(resolved)

    def _read_local(self, resolved: ResolvedSource) -> bytes:
        try:
            with open(resolved.location, "rb") as f:
                data = f.read()
        except OSError as e:
            logger.error(
                "Cannot read %s attachment %s: %s", resolved.kind, resolved.location, e
            )
            raise AttachmentReadError(
                f"Cannot read file {resolved.location}: {e.strerror or e}",
                kind=resolved.kind,
                source=resolved.original,
            ) from e

        logger.debug("Read %d bytes from %s", len(data), resolved.location)
        return data

    def _fetch(self, resolved: ResolvedSource) -> bytes:
        try:
            data = self.fetcher(resolved.location)
        except httpx.HTTPStatusError as e:
            logger.error(
                "Fetching %s attachment %s returned %d",
                resolved.kind,
                resolved.location,
                e.response.status_code,
            )
            raise AttachmentFetchError(
                f"GET returned status {e.response.status_code}",
                kind=resolved.kind,
                source=resolved.original,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            logger.error(
                "Fetching %s attachment %s failed: %s",
                resolved.kind,
                resolved.location,
                e,
            )
            raise AttachmentFetchError(
                f"GET failed: {e}", kind=resolved.kind, source=resolved.original
            ) from e

        logger.debug("Fetched %d bytes from %s", len(data), resolved.location)
        return data
