from dataclasses import dataclass


@dataclass(frozen=True)
class RecognitionResult:
    """Text returned by an image recognition backend."""

    text: str
    error: str | None = None
