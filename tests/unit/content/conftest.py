from collections.abc import Callable
from pathlib import Path

import pytest

from unillm.content.resolver import AttachmentResolver


class FakeFetcher:
    """Serves canned bytes per URL and records every request."""

    def __init__(self, responses: dict[str, bytes] | None = None) -> None:
        self.responses = responses or {}
        self.requested: list[str] = []

    def __call__(self, url: str) -> bytes:
        self.requested.append(url)
        return self.responses[url]


@pytest.fixture
def make_fetcher() -> Callable[..., FakeFetcher]:
    return FakeFetcher


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher({"https://ex.com/voice.mp3?sig=abc": b"ID3 remote audio"})


@pytest.fixture
def resolver(fetcher: FakeFetcher) -> AttachmentResolver:
    return AttachmentResolver(fetcher=fetcher)


@pytest.fixture
def png_bytes() -> bytes:
    return b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR fake image"


@pytest.fixture
def wav_bytes() -> bytes:
    return b"RIFF\x24\x00\x00\x00WAVEfmt fake audio"


@pytest.fixture
def image_file(tmp_path: Path, png_bytes: bytes) -> Path:
    path = tmp_path / "cat.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def audio_file(tmp_path: Path, wav_bytes: bytes) -> Path:
    path = tmp_path / "clip.wav"
    path.write_bytes(wav_bytes)
    return path
