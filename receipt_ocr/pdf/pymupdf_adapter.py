import pymupdf

from receipt_ocr.extraction.cancellation import CancellationToken
from receipt_ocr.extraction.models import TextExtractionResult
from receipt_ocr.logging.logger import Log
from receipt_ocr.pdf.base import BasePdfExtractor

# index of the word text inside a PyMuPDF "words" tuple
_WORD_TEXT = 4


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def extract(
        self,
        pdf_bytes: bytes,
        token: CancellationToken | None = None,
    ) -> TextExtractionResult:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.page_count == 0:
                    return TextExtractionResult.failure("PDF document has no pages")
                parts: list[str] = []
                for index in range(doc.page_count):
                    if token is not None and token.cancelled:
                        return TextExtractionResult.failure(token.reason())
                    parts.append(self._page_text(doc, index) + "\n")
            return TextExtractionResult(text="".join(parts), unit_count=len(parts))
        except Exception as exc:
            return TextExtractionResult.failure(f"pymupdf extraction failed: {exc}")

    def _page_text(self, doc: pymupdf.Document, index: int) -> str:
        try:
            words = doc.load_page(index).get_text("words", sort=True)
        except Exception as exc:
            Log.warning(f"pymupdf could not read page {index + 1}: {exc}")
            return ""
        return " ".join(word[_WORD_TEXT] for word in words)
