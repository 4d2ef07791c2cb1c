import time

from receipt_ocr.categorization.service import CategorizationService
from receipt_ocr.config.settings import Settings
from receipt_ocr.extraction.cancellation import CancellationToken
from receipt_ocr.extraction.text_extractor import TextExtractor
from receipt_ocr.logging.logger import Log
from receipt_ocr.parsing.parser import TransactionParser
from receipt_ocr.pipeline.exceptions import ErrorKind, FileValidationError, PipelineError
from receipt_ocr.pipeline.models import ExtractionOutcome, PipelineContext
from receipt_ocr.pipeline.steps import (
    CategorizeStep,
    ExtractTextStep,
    ParseTransactionStep,
    PipelineStep,
)
from receipt_ocr.upload.models import UploadedFile, ValidationResult
from receipt_ocr.upload.validator import FileValidator


class Processor:
    """Runs one upload through the pipeline.

    Pipeline: validate -> extract text -> parse -> categorize.
    Every failure is returned as a classified ExtractionOutcome; nothing
    raised by a step escapes ``process`` or ``run``.
    """

    def __init__(self, validator: FileValidator, steps: list[PipelineStep]) -> None:
        self._validator = validator
        self._steps = steps

    def validate(self, file: UploadedFile) -> ValidationResult:
        return self._validator.validate(file)

    def process(
        self,
        file: UploadedFile,
        token: CancellationToken | None = None,
    ) -> ExtractionOutcome:
        """Validate the upload, then run the remaining steps."""
        try:
            self._validator.ensure_valid(file)
        except FileValidationError as exc:
            Log.info(f"Rejected upload {file.filename or ''}: {exc}")
            return ExtractionOutcome.failed(str(exc), exc.kind)
        return self.run(file, token)

    def run(
        self,
        file: UploadedFile,
        token: CancellationToken | None = None,
    ) -> ExtractionOutcome:
        """Run extraction, parsing and categorization on an already validated upload."""
        started = time.monotonic()
        context = PipelineContext(file=file, token=token)
        for step in self._steps:
            try:
                context = step.run(context)
            except PipelineError as exc:
                return self._failed(str(exc), exc.kind, started)
            except Exception as exc:
                Log.error(f"{type(step).__name__} raised unexpectedly: {exc}")
                return self._failed(str(exc) or type(exc).__name__, step.error_kind, started)

        if context.extraction is None:
            return self._failed("Pipeline produced no extraction", ErrorKind.PARSE, started)
        return ExtractionOutcome.succeeded(
            raw_text=context.raw_text,
            extraction=context.extraction,
            processing_time_ms=_elapsed_ms(started),
        )

    def _failed(self, message: str, kind: ErrorKind, started: float) -> ExtractionOutcome:
        Log.error(f"Extraction attempt failed ({kind.value}): {message}")
        return ExtractionOutcome.failed(message, kind, processing_time_ms=_elapsed_ms(started))


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all required adapters."""
    validator = FileValidator.from_settings(settings)
    text_extractor = TextExtractor.from_settings(settings)
    parser = TransactionParser.from_settings(settings)
    categorization = CategorizationService.from_settings(settings)
    return Processor(
        validator=validator,
        steps=[
            ExtractTextStep(text_extractor),
            ParseTransactionStep(parser),
            CategorizeStep(categorization),
        ],
    )
