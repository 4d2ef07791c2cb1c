from receipt_ocr.config.settings import Settings
from receipt_ocr.logging.logger import Log
from receipt_ocr.pdf.base import BasePdfExtractor
from receipt_ocr.pdf.pdfplumber_adapter import PdfPlumberAdapter
from receipt_ocr.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Maps ``settings.pdf_engine`` to a page-by-page PDF text extractor."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        return cls.for_engine(settings.pdf_engine)

    @classmethod
    def for_engine(cls, engine: str) -> BasePdfExtractor:
        name = engine.strip().lower()
        if name not in cls.ADAPTERS:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {sorted(cls.ADAPTERS)}"
            )
        Log.debug(f"Using {name} for PDF text extraction")
        return cls.ADAPTERS[name]()
