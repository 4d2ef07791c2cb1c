import io

import pytesseract
from PIL import Image, ImageOps

from receipt_ocr.extraction.cancellation import CancellationToken
from receipt_ocr.logging.logger import Log
from receipt_ocr.ocr.base import BaseImageRecognizer
from receipt_ocr.ocr.models import RecognitionResult


class TesseractAdapter(BaseImageRecognizer):
    """Recognizes text in images with the Tesseract binary via pytesseract."""

    def __init__(self, language: str = "eng", tesseract_cmd: str = "") -> None:
        self._language = language
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def recognize(
        self,
        image_bytes: bytes,
        token: CancellationToken | None = None,
    ) -> RecognitionResult:
        if token is not None and token.cancelled:
            return RecognitionResult(text="", error=token.reason())
        try:
            image = self._load_image(image_bytes)
        except Exception as exc:
            return RecognitionResult(text="", error=f"Could not open image: {exc}")

        options: dict[str, object] = {"lang": self._language}
        if token is not None:
            # decoding may have used up the deadline; pytesseract reads timeout=0 as unbounded
            remaining = token.remaining()
            if token.cancelled or (remaining is not None and remaining <= 0):
                return RecognitionResult(text="", error=token.reason())
            if remaining is not None:
                options["timeout"] = remaining
        try:
            text = pytesseract.image_to_string(image, **options)
        except pytesseract.TesseractNotFoundError:
            return RecognitionResult(
                text="",
                error="Tesseract OCR binary not found; install tesseract-ocr",
            )
        except RuntimeError as exc:
            if token is not None and token.cancelled:
                return RecognitionResult(text="", error=token.reason())
            return RecognitionResult(text="", error=f"Image OCR failed: {exc}")
        except Exception as exc:
            return RecognitionResult(text="", error=f"Image OCR failed: {exc}")

        Log.debug(f"Tesseract recognized {len(text)} chars")
        return RecognitionResult(text=text)

    def _load_image(self, image_bytes: bytes) -> Image.Image:
        image = Image.open(io.BytesIO(image_bytes))
        image = ImageOps.exif_transpose(image)
        return image.convert("L")
