from dataclasses import dataclass


@dataclass(frozen=True)
class CompletionConfig:
    """Model and sampling parameters for one kind of completion request."""

    model: str
    temperature: float = 0.3
    max_tokens: int = 1000
