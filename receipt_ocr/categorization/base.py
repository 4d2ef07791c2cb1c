from abc import ABC, abstractmethod


class BaseCategoryClassifier(ABC):
    """Contract for secondary classifiers consulted when no keyword rule matches."""

    @abstractmethod
    def classify(self, description: str, categories: list[str]) -> str | None:
        """Pick a category for a description.

        Args:
            description: Transaction description that matched no keyword rule.
            categories: Category names the answer must come from.

        Returns:
            One of ``categories``, or None when the classifier has no opinion.
        """
