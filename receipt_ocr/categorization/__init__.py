from receipt_ocr.categorization.base import BaseCategoryClassifier
from receipt_ocr.categorization.keywords import CategoryKeywordDictionary, load_keyword_dictionary
from receipt_ocr.categorization.service import CategorizationService

__all__ = [
    "BaseCategoryClassifier",
    "CategorizationService",
    "CategoryKeywordDictionary",
    "load_keyword_dictionary",
]
