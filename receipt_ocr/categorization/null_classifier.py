from receipt_ocr.categorization.base import BaseCategoryClassifier


class NullCategoryClassifier(BaseCategoryClassifier):
    """Baseline classifier: never has an opinion.

    Use this module as a reference when wiring in a real classifier.
    Implement BaseCategoryClassifier and register it in CategoryClassifierFactory.
    """

    def classify(self, description: str, categories: list[str]) -> str | None:
        _ = description, categories
        return None
