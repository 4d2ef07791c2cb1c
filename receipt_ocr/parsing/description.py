import re
from collections.abc import Iterator

from receipt_ocr.parsing.locales import LocaleFormat

MARKER_SCORE = 0.85
RESIDUAL_SCORE = 0.5
LEADING_NAME_SCORE = 0.6

Span = tuple[int, int]

_WHITESPACE_RE = re.compile(r"\s+")
# the next "Label:" on a flattened line ends a value
_NEXT_LABEL_RE = re.compile(r"\s[A-Za-z]\w{0,20}\s*:")
# a capitalized business name at the start of a line
_LEADING_NAME_RE = re.compile(r"^[A-Z][A-Za-z&.' ]*[A-Za-z.]")
_EDGE_CHARS = " \t:;,.-|*#=_~"


def _marker_regex(markers: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(m) for m in sorted(markers, key=len, reverse=True))
    return re.compile(rf"\b(?:{alternatives})\b\s*[:\-]\s*(?P<value>[^\n]+)", re.IGNORECASE)


class DescriptionExtractor:
    """Derives a short description and a merchant name from residual text."""

    def __init__(self, locale: LocaleFormat, max_length: int = 50) -> None:
        self._max_length = max_length
        self._marker_re = _marker_regex(locale.description_markers)
        self._merchant_re = _marker_regex(locale.merchant_markers)
        noise = "|".join(
            re.escape(k)
            for k in (
                *locale.amount_keywords,
                *locale.description_markers,
                *locale.merchant_markers,
            )
        )
        self._noise_re = re.compile(rf"^(?:(?:{noise})\W*)+$", re.IGNORECASE)

    def extract(self, text: str, removed: list[Span]) -> tuple[str, float] | None:
        """Return (description, confidence) or None when nothing usable remains.

        ``removed`` holds the spans of the amount and date tokens already
        consumed by the other field scanners.
        """
        residual = _blank_out(text, removed)
        marked = self._marked_value(self._marker_re, residual)
        if marked is not None:
            return marked, MARKER_SCORE
        segment = next(self._residual_segments(residual), None)
        return (segment, RESIDUAL_SCORE) if segment is not None else None

    def merchant(self, text: str, removed: list[Span]) -> tuple[str, float] | None:
        """Return (merchant, confidence) from a merchant marker or a leading capitalized name."""
        residual = _blank_out(text, removed)
        marked = self._marked_value(self._merchant_re, residual)
        if marked is not None:
            return marked, MARKER_SCORE
        for segment in self._residual_segments(residual):
            name = _LEADING_NAME_RE.match(segment)
            if name is None:
                continue
            cleaned = self._clean(name.group())
            if cleaned is not None and sum(ch.isalpha() for ch in cleaned) >= 2:
                return cleaned, LEADING_NAME_SCORE
        return None

    def _marked_value(self, pattern: re.Pattern[str], residual: str) -> str | None:
        match = pattern.search(residual)
        if match is None:
            return None
        return self._clean(_cut_at_label(match["value"]))

    def _residual_segments(self, residual: str) -> Iterator[str]:
        for line in residual.splitlines():
            segment = _cut_at_label(line).strip()
            if segment.endswith(":"):
                # a label whose value was consumed as an amount or date
                continue
            cleaned = self._clean(segment)
            if cleaned is not None and not self._noise_re.match(cleaned):
                yield cleaned

    def _clean(self, value: str) -> str | None:
        value = _WHITESPACE_RE.sub(" ", value).strip(_EDGE_CHARS)
        if not any(ch.isalpha() for ch in value):
            return None
        return value[: self._max_length].rstrip(_EDGE_CHARS)


def _cut_at_label(value: str) -> str:
    label = _NEXT_LABEL_RE.search(value)
    return value[: label.start()] if label is not None else value


def _blank_out(text: str, spans: list[Span]) -> str:
    chars = list(text)
    for start, end in spans:
        chars[start:end] = " " * (end - start)
    return "".join(chars)
