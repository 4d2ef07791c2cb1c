import re

from receipt_ocr.config.settings import Settings
from receipt_ocr.logging.logger import Log
from receipt_ocr.parsing.amounts import AmountCandidate, AmountScanner
from receipt_ocr.parsing.dates import DateScanner
from receipt_ocr.parsing.description import DescriptionExtractor
from receipt_ocr.parsing.locales import LocaleFormat, get_locale
from receipt_ocr.parsing.models import ParsedTransaction, TransactionType

DEFAULT_TYPE_SCORE = 0.6


class TransactionParser:
    """Turns raw document text into a candidate ParsedTransaction.

    Amount, date, description and transaction type are extracted
    independently, so a miss on one field never blanks another. The
    category is always left unset; categorization is a separate step.
    """

    def __init__(self, locale: LocaleFormat | str = "id", description_max_length: int = 50) -> None:
        self._locale = get_locale(locale) if isinstance(locale, str) else locale
        self._amounts = AmountScanner(self._locale)
        self._dates = DateScanner(self._locale)
        self._descriptions = DescriptionExtractor(self._locale, description_max_length)
        self._expense_re = _keyword_regex(self._locale.expense_keywords)
        self._income_re = _keyword_regex(self._locale.income_keywords)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TransactionParser":
        return cls(
            locale=settings.locale,
            description_max_length=settings.description_max_length,
        )

    def parse(self, raw_text: str) -> ParsedTransaction | None:
        """Parse raw text; None when neither amount nor description is found."""
        if not raw_text or not raw_text.strip():
            return None

        date_candidates = self._dates.scan(raw_text)
        date_spans = [(c.start, c.end) for c in date_candidates]
        amount_candidates = self._amounts.scan(raw_text, excluded=date_spans)
        amount = self._amounts.select(amount_candidates)
        chosen_date = self._dates.select(
            date_candidates, anchor=amount.span if amount is not None else None
        )
        removed = date_spans + [c.span for c in amount_candidates]
        description = self._descriptions.extract(raw_text, removed)
        merchant = self._descriptions.merchant(raw_text, removed)

        if amount is None and description is None:
            Log.debug("No amount or description found in extracted text")
            return None

        confidence: dict[str, float] = {}
        if amount is not None:
            confidence["amount"] = amount.confidence
        if chosen_date is not None:
            confidence["date"] = chosen_date.confidence
        if description is not None:
            confidence["description"] = description[1]
        if merchant is not None:
            confidence["merchant"] = merchant[1]
        transaction_type, type_score = self._transaction_type(raw_text, amount)
        confidence["transaction_type"] = type_score

        return ParsedTransaction(
            amount=amount.value if amount is not None else None,
            date=chosen_date.value if chosen_date is not None else None,
            description=description[0] if description is not None else None,
            merchant=merchant[0] if merchant is not None else None,
            currency=self._currency(raw_text, amount),
            transaction_type=transaction_type,
            confidence=confidence,
        )

    def _currency(self, raw_text: str, amount: AmountCandidate | None) -> str:
        if amount is not None and amount.currency is not None:
            return amount.currency
        return self._amounts.detect_currency(raw_text) or self._locale.default_currency

    def _transaction_type(
        self, raw_text: str, amount: AmountCandidate | None
    ) -> tuple[TransactionType, float]:
        expense = len(self._expense_re.findall(raw_text))
        # "kartu kredit" is a card payment, not a credit to the account
        income = len(self._income_re.findall(self._expense_re.sub(" ", raw_text)))
        if amount is not None and amount.value < 0:
            expense += 1
        if income > expense:
            return "income", round(min(0.7 + income * 0.05, 0.99), 2)
        if expense > income:
            return "expense", round(min(0.7 + expense * 0.05, 0.99), 2)
        return "expense", DEFAULT_TYPE_SCORE


def _keyword_regex(keywords: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)
