from dataclasses import dataclass

from receipt_ocr.extraction.cancellation import CancellationToken
from receipt_ocr.parsing.models import ParsedTransaction
from receipt_ocr.pipeline.exceptions import ErrorKind
from receipt_ocr.upload.models import UploadedFile


@dataclass(slots=True)
class PipelineContext:
    """Accumulates data as one upload moves through the pipeline steps."""

    file: UploadedFile
    token: CancellationToken | None = None
    raw_text: str = ""
    extraction: ParsedTransaction | None = None


@dataclass(frozen=True)
class ExtractionOutcome:
    """Result of one attempt: an extraction on success, a classified error otherwise."""

    success: bool
    raw_text: str | None = None
    extraction: ParsedTransaction | None = None
    processing_time_ms: int | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def succeeded(
        cls,
        raw_text: str,
        extraction: ParsedTransaction,
        processing_time_ms: int,
    ) -> "ExtractionOutcome":
        return cls(
            success=True,
            raw_text=raw_text,
            extraction=extraction,
            processing_time_ms=processing_time_ms,
        )

    @classmethod
    def failed(
        cls,
        error: str,
        error_kind: ErrorKind,
        processing_time_ms: int | None = None,
    ) -> "ExtractionOutcome":
        return cls(
            success=False,
            error=error,
            error_kind=error_kind,
            processing_time_ms=processing_time_ms,
        )
