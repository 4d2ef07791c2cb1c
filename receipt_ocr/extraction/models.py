from dataclasses import dataclass


@dataclass(frozen=True)
class TextExtractionResult:
    """Raw text pulled from a document.

    ``unit_count`` is the number of pages read (1 for an image). On failure
    ``text`` is empty, ``unit_count`` is 0 and ``error`` says why.
    """

    text: str
    unit_count: int
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: str) -> "TextExtractionResult":
        return cls(text="", unit_count=0, error=error)
