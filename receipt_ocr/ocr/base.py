from abc import ABC, abstractmethod

from receipt_ocr.extraction.cancellation import CancellationToken
from receipt_ocr.ocr.models import RecognitionResult


class BaseImageRecognizer(ABC):
    """Contract for image OCR backends."""

    @abstractmethod
    def recognize(
        self,
        image_bytes: bytes,
        token: CancellationToken | None = None,
    ) -> RecognitionResult:
        """Recognize text in an image.

        Args:
            image_bytes: Raw image file content (PNG, JPEG, WEBP).
            token: Bounds the recognition call; its remaining time is used
                   as the backend timeout.

        Returns:
            RecognitionResult with the recognized text, or an error message.
            Never raises.
        """
