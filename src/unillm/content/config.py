# src/unillm/content/config.py

from dataclasses import dataclass


@dataclass(frozen=True)
class FetchConfig:
    """Configuration for downloading remote attachments.

    Immutable. Explicit. No magic defaults from environment.
    """

    timeout: float = 30.0
    follow_redirects: bool = True
