from receipt_ocr.categorization.base import BaseCategoryClassifier
from receipt_ocr.categorization.null_classifier import NullCategoryClassifier
from receipt_ocr.config.settings import Settings


class CategoryClassifierFactory:
    """Creates the configured secondary category classifier."""

    CLASSIFIERS: dict[str, type[BaseCategoryClassifier]] = {
        "none": NullCategoryClassifier,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseCategoryClassifier:
        name = settings.category_classifier.lower()
        classifier_cls = cls.CLASSIFIERS.get(name)
        if classifier_cls is None:
            raise ValueError(
                f"Unknown category classifier '{name}'. Choose from: {list(cls.CLASSIFIERS)}"
            )
        return classifier_cls()
