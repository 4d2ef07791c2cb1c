from abc import ABC, abstractmethod

from receipt_ocr.extraction.cancellation import CancellationToken
from receipt_ocr.extraction.models import TextExtractionResult


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(
        self,
        pdf_bytes: bytes,
        token: CancellationToken | None = None,
    ) -> TextExtractionResult:
        """Extract plain text from PDF bytes, page by page in page order.

        Each page's words are joined with a single space and the page text
        is followed by a newline. A page that cannot be read contributes an
        empty string.

        Args:
            pdf_bytes: Raw PDF file content.
            token: Checked before each page; extraction stops once it fires.

        Returns:
            TextExtractionResult. A document that cannot be opened, has no
            pages, or was cancelled yields empty text and an error message.
            Never raises.
        """
