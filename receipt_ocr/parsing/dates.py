import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import date

from receipt_ocr.parsing.locales import LocaleFormat

Span = tuple[int, int]

_MIN_YEAR = 1900
_MAX_YEAR = 2100


@dataclass(frozen=True)
class DateCandidate:
    value: date
    start: int
    end: int
    confidence: float


def _safe_date(year: int, month: int, day: int) -> date | None:
    if not _MIN_YEAR <= year <= _MAX_YEAR:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _full_year(year: str) -> int:
    return int(year) + 2000 if len(year) == 2 else int(year)


class DateScanner:
    """Finds calendar dates in raw text.

    Patterns are tried in a fixed priority order; a span claimed by an
    earlier pattern is not matched again by a later one.
    """

    def __init__(self, locale: LocaleFormat) -> None:
        self._locale = locale
        self._months = locale.all_months
        names = "|".join(sorted(self._months, key=len, reverse=True))
        month = rf"(?P<month>{names})\.?(?![a-z])"
        self._patterns: list[tuple[re.Pattern[str], Callable[[re.Match[str]], Iterator[tuple[date, float]]]]] = [
            (
                re.compile(r"(?<!\d)(\d{4})([-/.])(\d{1,2})\2(\d{1,2})(?!\d)"),
                self._iso,
            ),
            (
                re.compile(
                    rf"(?<!\d)(?P<day>\d{{1,2}})(?:st|nd|rd|th)?[\s\-.]+{month}"
                    r",?[\s\-.]+(?P<year>\d{4}|\d{2})(?!\d)",
                    re.IGNORECASE,
                ),
                self._named,
            ),
            (
                re.compile(
                    rf"(?<![a-z]){month}\s+(?P<day>\d{{1,2}})(?:st|nd|rd|th)?,?"
                    r"\s+(?P<year>\d{4})(?!\d)",
                    re.IGNORECASE,
                ),
                self._named,
            ),
            (
                re.compile(r"(?<![\d/.\-])(\d{1,2})([/.\-])(\d{1,2})\2(\d{4})(?!\d)"),
                self._numeric(0.8),
            ),
            (
                re.compile(r"(?<![\d/.\-])(\d{1,2})([/.\-])(\d{1,2})\2(\d{2})(?![\d/.\-])"),
                self._numeric(0.6),
            ),
        ]

    def scan(self, text: str) -> list[DateCandidate]:
        claimed: list[Span] = []
        candidates: list[DateCandidate] = []
        for pattern, build in self._patterns:
            for match in pattern.finditer(text):
                span = match.span()
                if any(span[0] < end and start < span[1] for start, end in claimed):
                    continue
                built = next(build(match), None)
                if built is None:
                    continue
                value, confidence = built
                candidates.append(DateCandidate(value, span[0], span[1], confidence))
                claimed.append(span)
        return candidates

    def select(
        self,
        candidates: list[DateCandidate],
        anchor: Span | None = None,
    ) -> DateCandidate | None:
        """Nearest to the anchor (the amount token), else the most recent."""
        if not candidates:
            return None
        if anchor is None:
            return max(candidates, key=lambda c: c.value)
        return min(
            candidates,
            key=lambda c: (_distance((c.start, c.end), anchor), -c.value.toordinal()),
        )

    def _iso(self, match: re.Match[str]) -> Iterator[tuple[date, float]]:
        value = _safe_date(int(match[1]), int(match[3]), int(match[4]))
        if value is not None:
            yield value, 0.95

    def _named(self, match: re.Match[str]) -> Iterator[tuple[date, float]]:
        month = self._months[match["month"].lower()]
        value = _safe_date(_full_year(match["year"]), month, int(match["day"]))
        if value is not None:
            yield value, 0.9

    def _numeric(
        self, confidence: float
    ) -> Callable[[re.Match[str]], Iterator[tuple[date, float]]]:
        def build(match: re.Match[str]) -> Iterator[tuple[date, float]]:
            first, second, year = int(match[1]), int(match[3]), _full_year(match[4])
            day, month = (first, second) if self._locale.day_first else (second, first)
            preferred = _safe_date(year, month, day)
            if preferred is not None:
                yield preferred, confidence
            swapped = _safe_date(year, day, month)
            if swapped is not None:
                yield swapped, round(confidence - 0.1, 2)

        return build


def _distance(span: Span, anchor: Span) -> int:
    if span[0] < anchor[1] and anchor[0] < span[1]:
        return 0
    return min(abs(span[0] - anchor[1]), abs(anchor[0] - span[1]))
