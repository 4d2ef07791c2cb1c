import io

import pdfplumber
from pdfplumber.page import Page

from receipt_ocr.extraction.cancellation import CancellationToken
from receipt_ocr.extraction.models import TextExtractionResult
from receipt_ocr.logging.logger import Log
from receipt_ocr.pdf.base import BasePdfExtractor


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract(
        self,
        pdf_bytes: bytes,
        token: CancellationToken | None = None,
    ) -> TextExtractionResult:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = pdf.pages
                if not pages:
                    return TextExtractionResult.failure("PDF document has no pages")
                parts: list[str] = []
                for number, page in enumerate(pages, start=1):
                    if token is not None and token.cancelled:
                        return TextExtractionResult.failure(token.reason())
                    parts.append(self._page_text(page, number) + "\n")
            return TextExtractionResult(text="".join(parts), unit_count=len(parts))
        except Exception as exc:
            return TextExtractionResult.failure(f"pdfplumber extraction failed: {exc}")

    def _page_text(self, page: Page, number: int) -> str:
        try:
            words = page.extract_words()
        except Exception as exc:
            Log.warning(f"pdfplumber could not read page {number}: {exc}")
            return ""
        return " ".join(word["text"] for word in words)
