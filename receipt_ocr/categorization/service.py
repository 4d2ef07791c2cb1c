from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from receipt_ocr.categorization.base import BaseCategoryClassifier
from receipt_ocr.categorization.factory import CategoryClassifierFactory
from receipt_ocr.categorization.keywords import CategoryKeywordDictionary, load_keyword_dictionary
from receipt_ocr.categorization.null_classifier import NullCategoryClassifier
from receipt_ocr.config.settings import Settings
from receipt_ocr.logging.logger import Log


class CategorizationService:
    """Resolves a spending category for a transaction description.

    Keyword rules are checked first, in dictionary order; the first category
    with a keyword occurring in the description wins. When no rule matches
    the secondary classifier is asked. Holds no mutable state.
    """

    def __init__(
        self,
        dictionary: CategoryKeywordDictionary,
        classifier: BaseCategoryClassifier | None = None,
        max_workers: int = 8,
    ) -> None:
        self._dictionary = dictionary
        self._classifier = classifier if classifier is not None else NullCategoryClassifier()
        self._max_workers = max_workers

    @classmethod
    def from_settings(cls, settings: Settings) -> "CategorizationService":
        path = Path(settings.category_keywords_path) if settings.category_keywords_path else None
        return cls(
            dictionary=load_keyword_dictionary(settings.locale, path),
            classifier=CategoryClassifierFactory.create(settings),
            max_workers=settings.categorization_max_workers,
        )

    @property
    def categories(self) -> list[str]:
        return self._dictionary.categories

    def categorize(self, description: str | None) -> str | None:
        if not description or not description.strip():
            return None
        category = self._categorize_by_rules(description)
        if category is not None:
            return category
        Log.debug(f"No keyword rule matched '{description}'")
        return self._categorize_by_classifier(description)

    def predict_batch(self, descriptions: list[str]) -> list[str | None]:
        """Categorize each description; output order matches input order."""
        if not descriptions:
            return []
        workers = max(1, min(self._max_workers, len(descriptions)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self.categorize, descriptions))

    def _categorize_by_rules(self, description: str) -> str | None:
        lowered = description.lower()
        for category, keywords in self._dictionary:
            if any(keyword in lowered for keyword in keywords):
                return category
        return None

    def _categorize_by_classifier(self, description: str) -> str | None:
        categories = self._dictionary.categories
        category = self._classifier.classify(description, categories)
        if category is not None and category not in categories:
            Log.warning(f"Classifier returned unknown category '{category}', ignoring")
            return None
        return category
