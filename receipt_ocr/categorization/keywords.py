"""Bundled per-locale category keyword dictionaries.

Iteration order is the tie-break: when keywords of several categories
occur in one description, the category listed first wins.
"""

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from receipt_ocr.categorization.exceptions import CategorizationConfigError

INDONESIAN_CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "Makanan": [
        "restoran",
        "cafe",
        "kopi",
        "makan",
        "food",
        "warung",
        "gofood",
        "grabfood",
        "mcd",
        "kfc",
        "pizza",
    ],
    "Transportasi": [
        "gojek",
        "grab",
        "taxi",
        "taksi",
        "bensin",
        "pertamina",
        "shell",
        "parkir",
        "tol",
        "kereta",
        "bus",
        "ojek",
    ],
    "Belanja": [
        "tokopedia",
        "shopee",
        "lazada",
        "bukalapak",
        "indomaret",
        "alfamart",
        "supermarket",
        "mall",
        "toko",
    ],
    "Hiburan": [
        "cinema",
        "bioskop",
        "netflix",
        "spotify",
        "game",
        "hiburan",
        "wisata",
        "liburan",
    ],
    "Tagihan": [
        "listrik",
        "pln",
        "air",
        "pdam",
        "internet",
        "telkom",
        "indihome",
        "pulsa",
        "token",
        "cicilan",
        "kartu kredit",
    ],
    "Kesehatan": [
        "rumah sakit",
        "klinik",
        "apotek",
        "dokter",
        "obat",
        "farmasi",
        "medical",
    ],
    "Pendidikan": ["sekolah", "universitas", "kursus", "buku", "les", "pendidikan"],
    "Transfer": ["transfer", "kirim", "setor", "tarik", "atm", "withdraw", "deposit"],
    "Gaji": ["gaji", "salary", "thr", "bonus", "insentif"],
    "Lainnya": ["lain", "other", "misc"],
}

ENGLISH_CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "Food & Dining": [
        "restaurant",
        "cafe",
        "coffee",
        "pizza",
        "burger",
        "grocery",
        "food",
        "lunch",
        "dinner",
        "breakfast",
        "starbucks",
        "mcdonald",
        "whole foods",
    ],
    "Transportation": [
        "uber",
        "lyft",
        "taxi",
        "gas",
        "fuel",
        "parking",
        "transit",
        "train",
        "bus",
        "car",
        "vehicle",
        "metro",
    ],
    "Shopping": [
        "amazon",
        "walmart",
        "target",
        "mall",
        "store",
        "shop",
        "retail",
        "clothing",
        "apparel",
        "shoes",
        "dress",
    ],
    "Entertainment": [
        "movie",
        "cinema",
        "theater",
        "concert",
        "event",
        "spotify",
        "netflix",
        "game",
        "gaming",
        "sports",
    ],
    "Utilities": ["electric", "water", "internet", "phone", "telecom", "power", "bill"],
    "Healthcare": [
        "pharmacy",
        "doctor",
        "hospital",
        "medical",
        "clinic",
        "medicine",
        "dentist",
        "cvs",
        "walgreens",
    ],
    "Housing": ["rent", "mortgage", "landlord", "apartment", "house", "property", "real estate"],
    "Education": ["school", "university", "college", "tuition", "course", "training", "lesson"],
}

BUNDLED_DICTIONARIES: dict[str, dict[str, list[str]]] = {
    "id": INDONESIAN_CATEGORY_KEYWORDS,
    "en": ENGLISH_CATEGORY_KEYWORDS,
}


@dataclass(frozen=True)
class CategoryKeywordDictionary:
    """Ordered, immutable category -> lowercase keywords mapping."""

    entries: tuple[tuple[str, tuple[str, ...]], ...]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, list[str]]) -> "CategoryKeywordDictionary":
        entries = []
        for category, keywords in mapping.items():
            if not isinstance(category, str) or not category:
                raise CategorizationConfigError("Category names must be non-empty strings")
            if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
                raise CategorizationConfigError(
                    f"Keywords for category '{category}' must be a list of strings"
                )
            cleaned = tuple(k.strip().lower() for k in keywords if k.strip())
            entries.append((category, cleaned))
        return cls(entries=tuple(entries))

    @property
    def categories(self) -> list[str]:
        return [category for category, _ in self.entries]

    def __iter__(self) -> Iterator[tuple[str, tuple[str, ...]]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def load_keyword_dictionary(
    locale: str = "id",
    path: Path | None = None,
) -> CategoryKeywordDictionary:
    """Load the keyword dictionary for a locale, or from a JSON file.

    Args:
        locale: Bundled dictionary to use when no path is given.
        path: JSON object of category -> keyword list. Key order is kept.

    Raises:
        CategorizationConfigError: unknown locale, unreadable or invalid file.
    """
    if path is None:
        mapping = BUNDLED_DICTIONARIES.get(locale.lower())
        if mapping is None:
            raise CategorizationConfigError(
                f"No keyword dictionary for locale '{locale}'. "
                f"Choose from: {list(BUNDLED_DICTIONARIES)}"
            )
        return CategoryKeywordDictionary.from_mapping(mapping)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CategorizationConfigError(f"Failed to load keyword dictionary: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CategorizationConfigError(f"Invalid keyword dictionary JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise CategorizationConfigError("Keyword dictionary must be a JSON object")
    return CategoryKeywordDictionary.from_mapping(data)
