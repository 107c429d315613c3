# src/unillm/llms/config.py

from dataclasses import dataclass
from typing import Literal

Provider = Literal["openai", "anthropic"]


@dataclass(frozen=True)
class LLMConfig:
    """Which provider and model to talk to, and how patiently.

    A missing api_key lets the provider SDK read its own environment variable.
    """

    provider: Provider
    model: str
    api_key: str | None = None
    timeout: float = 30.0
    max_retries: int = 3

    def __post_init__(self) -> None:
        if not self.model:
            raise ValueError("model must be non-empty")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {self.max_retries}")
