"""Per-locale number, date and keyword conventions used by the parser."""

from dataclasses import dataclass

ENGLISH_MONTHS: dict[str, int] = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "sept": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

INDONESIAN_MONTHS: dict[str, int] = {
    "januari": 1,
    "februari": 2,
    "maret": 3,
    "april": 4,
    "mei": 5,
    "juni": 6,
    "juli": 7,
    "agustus": 8,
    "september": 9,
    "oktober": 10,
    "november": 11,
    "desember": 12,
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "jun": 6,
    "jul": 7,
    "agu": 8,
    "ags": 8,
    "sep": 9,
    "okt": 10,
    "nov": 11,
    "des": 12,
}

# symbol (lowercase) -> ISO code
CURRENCY_SYMBOLS: dict[str, str] = {
    "rp": "IDR",
    "$": "USD",
    "€": "EUR",
    "£": "GBP",
    "¥": "JPY",
    "₹": "INR",
}

CURRENCY_CODES: tuple[str, ...] = (
    "IDR",
    "USD",
    "EUR",
    "GBP",
    "JPY",
    "CAD",
    "AUD",
    "INR",
    "SGD",
    "MYR",
)

# thousands separator conventionally used with a currency; others follow the locale
CURRENCY_THOUSANDS_SEPARATOR: dict[str, str] = {
    "IDR": ".",
    "USD": ",",
    "GBP": ",",
    "JPY": ",",
    "INR": ",",
    "CAD": ",",
    "AUD": ",",
    "SGD": ",",
    "MYR": ",",
}


@dataclass(frozen=True)
class LocaleFormat:
    code: str
    decimal_separator: str
    thousands_separator: str
    default_currency: str
    day_first: bool
    months: dict[str, int]
    amount_keywords: tuple[str, ...]
    description_markers: tuple[str, ...]
    merchant_markers: tuple[str, ...]
    expense_keywords: tuple[str, ...]
    income_keywords: tuple[str, ...]

    @property
    def all_months(self) -> dict[str, int]:
        """Locale month names plus English ones, which receipts use everywhere."""
        return {**ENGLISH_MONTHS, **self.months}


_EXPENSE_KEYWORDS_EN = (
    "paid",
    "charged",
    "purchase",
    "bought",
    "order",
    "delivery",
    "shipping",
    "debit",
    "withdraw",
    "credit card",
)
_INCOME_KEYWORDS_EN = (
    "deposit",
    "credit",
    "received",
    "refund",
    "rebate",
    "reimbursement",
    "salary",
    "wage",
    "income",
    "earnings",
    "transfer in",
)

INDONESIAN = LocaleFormat(
    code="id",
    decimal_separator=",",
    thousands_separator=".",
    default_currency="IDR",
    day_first=True,
    months=INDONESIAN_MONTHS,
    amount_keywords=(
        "grand total",
        "total",
        "jumlah",
        "nominal",
        "tagihan",
        "bayar",
        "amount",
    ),
    description_markers=(
        "merchant",
        "description",
        "keterangan",
        "deskripsi",
        "uraian",
        "berita",
        "toko",
    ),
    merchant_markers=("merchant", "nama toko", "toko", "outlet"),
    expense_keywords=(
        *_EXPENSE_KEYWORDS_EN,
        "bayar",
        "pembayaran",
        "pembelian",
        "beli",
        "tarik",
        "debet",
        "kartu kredit",
        "cicilan",
    ),
    income_keywords=(
        *_INCOME_KEYWORDS_EN,
        "gaji",
        "setor",
        "kredit",
        "diterima",
        "pengembalian",
    ),
)

ENGLISH = LocaleFormat(
    code="en",
    decimal_separator=".",
    thousands_separator=",",
    default_currency="USD",
    day_first=False,
    months={},
    amount_keywords=(
        "grand total",
        "total",
        "amount due",
        "balance due",
        "amount",
        "price",
        "cost",
        "charge",
    ),
    description_markers=("merchant", "description", "payee", "store"),
    merchant_markers=("merchant", "store", "payee"),
    expense_keywords=_EXPENSE_KEYWORDS_EN,
    income_keywords=_INCOME_KEYWORDS_EN,
)

LOCALES: dict[str, LocaleFormat] = {
    INDONESIAN.code: INDONESIAN,
    ENGLISH.code: ENGLISH,
}


def get_locale(code: str) -> LocaleFormat:
    locale = LOCALES.get(code.lower())
    if locale is None:
        raise ValueError(f"Unknown locale '{code}'. Choose from: {list(LOCALES)}")
    return locale
