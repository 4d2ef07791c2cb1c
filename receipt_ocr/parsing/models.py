from dataclasses import dataclass, field
import datetime
from decimal import Decimal
from typing import Literal

TransactionType = Literal["income", "expense"]


@dataclass(frozen=True)
class ParsedTransaction:
    """Candidate transaction reconstructed from raw document text.

    At least one of ``amount`` and ``description`` is set. ``confidence``
    maps each extracted field name to a score in [0, 1].
    """

    amount: Decimal | None = None
    date: datetime.date | None = None
    description: str | None = None
    merchant: str | None = None
    category: str | None = None
    currency: str | None = None
    transaction_type: TransactionType | None = None
    confidence: dict[str, float] | None = field(default=None, compare=False)

    @property
    def overall_confidence(self) -> float:
        if not self.confidence:
            return 0.0
        return round(sum(self.confidence.values()) / len(self.confidence), 2)

    def to_dict(self) -> dict[str, object]:
        """JSON-ready representation (amount as string, date as ISO)."""
        return {
            "amount": str(self.amount) if self.amount is not None else None,
            "date": self.date.isoformat() if self.date is not None else None,
            "description": self.description,
            "merchant": self.merchant,
            "category": self.category,
            "currency": self.currency,
            "transaction_type": self.transaction_type,
            "confidence": dict(self.confidence) if self.confidence else None,
            "overall_confidence": self.overall_confidence,
            "confidence_level": confidence_level(self.overall_confidence),
        }


def confidence_level(score: float) -> str:
    """Bucket a confidence score for display: high, medium or low."""
    if score >= 0.9:
        return "high"
    if score >= 0.7:
        return "medium"
    return "low"
