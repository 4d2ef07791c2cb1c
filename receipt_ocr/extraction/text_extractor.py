from receipt_ocr.config.settings import Settings
from receipt_ocr.extraction.cancellation import CancellationToken
from receipt_ocr.extraction.models import TextExtractionResult
from receipt_ocr.logging.logger import Log
from receipt_ocr.ocr.base import BaseImageRecognizer
from receipt_ocr.ocr.factory import ImageRecognizerFactory
from receipt_ocr.pdf.base import BasePdfExtractor
from receipt_ocr.pdf.factory import PdfExtractorFactory
from receipt_ocr.upload.models import UploadedFile

PDF_MIME_TYPE = "application/pdf"


class TextExtractor:
    """Routes an upload to the PDF extractor or the image recognizer."""

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        image_recognizer: BaseImageRecognizer,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._image_recognizer = image_recognizer

    @classmethod
    def from_settings(cls, settings: Settings) -> "TextExtractor":
        return cls(
            pdf_extractor=PdfExtractorFactory.create(settings),
            image_recognizer=ImageRecognizerFactory.create(settings),
        )

    def extract(
        self,
        file: UploadedFile,
        token: CancellationToken | None = None,
    ) -> TextExtractionResult:
        mime_type = file.mime_type.lower()
        if mime_type == PDF_MIME_TYPE:
            result = self._pdf_extractor.extract(file.content, token)
            Log.debug(f"PDF extraction read {result.unit_count} pages")
            return result
        if mime_type.startswith("image/"):
            recognized = self._image_recognizer.recognize(file.content, token)
            if recognized.error is not None:
                return TextExtractionResult(
                    text=recognized.text.strip(),
                    unit_count=0,
                    error=recognized.error,
                )
            return TextExtractionResult(text=recognized.text.strip(), unit_count=1)
        return TextExtractionResult.failure(
            f"No text extractor for media type '{file.mime_type}'"
        )
