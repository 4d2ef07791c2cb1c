import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from receipt_ocr.parsing.locales import (
    CURRENCY_CODES,
    CURRENCY_SYMBOLS,
    CURRENCY_THOUSANDS_SEPARATOR,
    LocaleFormat,
)

CURRENCY_SCORE = 0.9
BARE_SCORE = 0.6
KEYWORD_BONUS = 0.08
MAX_SCORE = 0.98

# how far back on the same line a total/amount keyword may sit
_KEYWORD_WINDOW = 40

Span = tuple[int, int]


@dataclass(frozen=True)
class AmountCandidate:
    value: Decimal
    start: int
    end: int
    currency: str | None
    confidence: float
    keyword_adjacent: bool = False

    @property
    def span(self) -> Span:
        return (self.start, self.end)


def _currency_pattern(group: str) -> str:
    symbols = "".join(re.escape(s) for s in CURRENCY_SYMBOLS if len(s) == 1)
    codes = "|".join(CURRENCY_CODES)
    return (
        rf"(?P<{group}>(?<![a-z])rp\.?|[{symbols}]|(?<![a-z])(?:{codes})(?![a-z]))"
    )


CURRENCY_RE = re.compile(_currency_pattern("currency"), re.IGNORECASE)

_NUMBER = r"(?P<number>\d[\d.,]*\d|\d)"

_PREFIXED_RE = re.compile(
    rf"(?P<sign>-)?{_currency_pattern('currency')}\s?(?P<sign2>-)?{_NUMBER}(?!\d)",
    re.IGNORECASE,
)
_SUFFIXED_RE = re.compile(
    rf"(?<![\d.,])(?P<sign>-)?{_NUMBER}\s?{_currency_pattern('currency')}",
    re.IGNORECASE,
)


def currency_code(token: str) -> str:
    """Map a matched currency symbol or code to its ISO code."""
    cleaned = token.lower().rstrip(".")
    return CURRENCY_SYMBOLS.get(cleaned, cleaned.upper())


def normalize_number(raw: str, thousands_separator: str) -> Decimal | None:
    """Turn a separator-formatted number into a Decimal.

    When both '.' and ',' appear the last one is the decimal mark. A lone
    separator followed by exactly three digits is a thousands separator
    only when it matches ``thousands_separator``.
    """
    raw = raw.replace(" ", "")
    last_dot = raw.rfind(".")
    last_comma = raw.rfind(",")
    if last_dot >= 0 and last_comma >= 0:
        decimal_mark = "." if last_dot > last_comma else ","
        grouping = "," if decimal_mark == "." else "."
        integer, _, fraction = raw.rpartition(decimal_mark)
        if decimal_mark in integer or not _valid_grouping(integer, grouping):
            return None
        cleaned = f"{integer.replace(grouping, '')}.{fraction}"
    elif last_dot >= 0 or last_comma >= 0:
        separator = "." if last_dot >= 0 else ","
        groups = raw.split(separator)
        if len(groups) > 2:
            if not _valid_grouping(raw, separator):
                return None
            cleaned = raw.replace(separator, "")
        elif len(groups[1]) == 3 and separator == thousands_separator:
            cleaned = "".join(groups)
        else:
            cleaned = ".".join(groups)
    else:
        cleaned = raw
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def _valid_grouping(integer: str, separator: str) -> bool:
    groups = integer.split(separator)
    if len(groups) == 1:
        return bool(groups[0])
    return 1 <= len(groups[0]) <= 3 and all(len(g) == 3 for g in groups[1:])


class AmountScanner:
    """Finds monetary amounts in raw text and picks the most likely total."""

    def __init__(self, locale: LocaleFormat) -> None:
        self._locale = locale
        thousands = re.escape(locale.thousands_separator)
        decimal = re.escape(locale.decimal_separator)
        self._bare_re = re.compile(
            rf"(?<![\w.,/:\-])(?P<sign>-)?"
            rf"(?P<number>\d{{1,3}}(?:{thousands}\d{{3}})+(?:{decimal}\d{{2}})?"
            rf"|\d+{decimal}\d{{2}})"
            rf"(?![\d/:]|[.,]\d)"
        )
        keywords = "|".join(re.escape(k) for k in locale.amount_keywords)
        self._keyword_re = re.compile(rf"\b(?:{keywords})\b", re.IGNORECASE)

    def scan(self, text: str, excluded: list[Span] | None = None) -> list[AmountCandidate]:
        """Return every amount token, currency-anchored ones first."""
        claimed: list[Span] = list(excluded or [])
        candidates: list[AmountCandidate] = []
        for pattern in (_PREFIXED_RE, _SUFFIXED_RE):
            for match in pattern.finditer(text):
                candidate = self._from_currency_match(text, match)
                if candidate is not None and not _overlaps(candidate.span, claimed):
                    candidates.append(candidate)
                    claimed.append(candidate.span)
        for match in self._bare_re.finditer(text):
            span = match.span()
            if _overlaps(span, claimed):
                continue
            value = normalize_number(match["number"], self._locale.thousands_separator)
            if value is None or value == 0:
                continue
            negative = bool(match["sign"]) or _parenthesized(text, *span)
            candidates.append(
                self._score(text, -value if negative else value, span, None, BARE_SCORE)
            )
            claimed.append(span)
        return candidates

    def select(self, candidates: list[AmountCandidate]) -> AmountCandidate | None:
        """Prefer keyword-adjacent tokens, then the largest magnitude."""
        if not candidates:
            return None
        adjacent = [c for c in candidates if c.keyword_adjacent]
        pool = adjacent or candidates
        return max(pool, key=lambda c: abs(c.value))

    def detect_currency(self, text: str) -> str | None:
        match = CURRENCY_RE.search(text)
        return currency_code(match["currency"]) if match else None

    def _from_currency_match(self, text: str, match: re.Match[str]) -> AmountCandidate | None:
        currency = currency_code(match["currency"])
        thousands = CURRENCY_THOUSANDS_SEPARATOR.get(
            currency, self._locale.thousands_separator
        )
        value = normalize_number(match["number"], thousands)
        if value is None or value == 0:
            return None
        negative = (
            bool(match["sign"])
            or bool(match.groupdict().get("sign2"))
            or _parenthesized(text, *match.span())
        )
        return self._score(
            text, -value if negative else value, match.span(), currency, CURRENCY_SCORE
        )

    def _score(
        self,
        text: str,
        value: Decimal,
        span: Span,
        currency: str | None,
        base: float,
    ) -> AmountCandidate:
        adjacent = self._keyword_before(text, span[0])
        confidence = min(base + (KEYWORD_BONUS if adjacent else 0.0), MAX_SCORE)
        return AmountCandidate(
            value=value,
            start=span[0],
            end=span[1],
            currency=currency,
            confidence=round(confidence, 2),
            keyword_adjacent=adjacent,
        )

    def _keyword_before(self, text: str, start: int) -> bool:
        line_start = text.rfind("\n", 0, start) + 1
        window = text[max(line_start, start - _KEYWORD_WINDOW):start]
        return self._keyword_re.search(window) is not None


def _overlaps(span: Span, spans: list[Span]) -> bool:
    return any(span[0] < end and start < span[1] for start, end in spans)


def _parenthesized(text: str, start: int, end: int) -> bool:
    return start > 0 and text[start - 1] == "(" and end < len(text) and text[end] == ")"
