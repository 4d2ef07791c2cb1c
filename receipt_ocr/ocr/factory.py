from receipt_ocr.config.settings import Settings
from receipt_ocr.ocr.base import BaseImageRecognizer
from receipt_ocr.ocr.tesseract_adapter import TesseractAdapter


class ImageRecognizerFactory:
    """Creates the configured image OCR backend."""

    ENGINES: tuple[str, ...] = ("tesseract",)

    @classmethod
    def create(cls, settings: Settings) -> BaseImageRecognizer:
        engine = settings.ocr_engine.lower()
        if engine == "tesseract":
            return TesseractAdapter(
                language=settings.ocr_language,
                tesseract_cmd=settings.tesseract_cmd,
            )
        raise ValueError(
            f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ENGINES)}"
        )
