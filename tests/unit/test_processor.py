from decimal import Decimal
from unittest.mock import MagicMock, patch

from receipt_ocr.parsing.models import ParsedTransaction
from receipt_ocr.pipeline.exceptions import (
    ErrorKind,
    ExtractionError,
    FileValidationError,
    ParseError,
)
from receipt_ocr.pipeline.models import PipelineContext
from receipt_ocr.pipeline.processor import Processor, build_processor
from receipt_ocr.pipeline.steps import (
    CategorizeStep,
    ExtractTextStep,
    ParseTransactionStep,
    PipelineStep,
)
from receipt_ocr.upload.models import UploadedFile, ValidationResult
from receipt_ocr.upload.validator import FileValidator

PARSED = ParsedTransaction(amount=Decimal("30000"), description="Warung", confidence={"amount": 0.98})


def _file() -> UploadedFile:
    return UploadedFile.from_bytes(b"%PDF-fake", "application/pdf", filename="r.pdf")


def _step(error_kind: ErrorKind = ErrorKind.EXTRACTION, side_effect=None) -> MagicMock:  # type: ignore[no-untyped-def]
    step = MagicMock(spec=PipelineStep)
    step.error_kind = error_kind
    if side_effect is None:
        step.run.side_effect = lambda context: context
    else:
        step.run.side_effect = side_effect
    return step


def _extract(context: PipelineContext) -> PipelineContext:
    context.raw_text = "Warung\nTotal Rp 30.000"
    return context


def _parse(context: PipelineContext) -> PipelineContext:
    context.extraction = PARSED
    return context


def _make_processor(*steps: MagicMock, valid: bool = True) -> tuple[Processor, MagicMock]:
    validator = MagicMock(spec=FileValidator)
    validator.validate.return_value = (
        ValidationResult(valid=True) if valid else ValidationResult(valid=False, error="File is empty")
    )
    if not valid:
        validator.ensure_valid.side_effect = FileValidationError("File is empty")
    return Processor(validator=validator, steps=list(steps)), validator


class TestProcessorSuccess:
    def test_runs_steps_in_order(self) -> None:
        calls: list[str] = []

        def record(name, fn):  # type: ignore[no-untyped-def]
            def run(context: PipelineContext) -> PipelineContext:
                calls.append(name)
                return fn(context)

            return run

        processor, _ = _make_processor(
            _step(side_effect=record("extract", _extract)),
            _step(ErrorKind.PARSE, record("parse", _parse)),
            _step(ErrorKind.PARSE, record("categorize", lambda c: c)),
        )

        outcome = processor.process(_file())

        assert calls == ["extract", "parse", "categorize"]
        assert outcome.success is True
        assert outcome.extraction == PARSED
        assert outcome.raw_text == "Warung\nTotal Rp 30.000"
        assert outcome.processing_time_ms is not None
        assert outcome.processing_time_ms >= 0
        assert outcome.error is None

    def test_passes_token_into_context(self) -> None:
        seen: list[object] = []

        def capture(context: PipelineContext) -> PipelineContext:
            seen.append(context.token)
            return _parse(context)

        processor, _ = _make_processor(_step(side_effect=capture))
        token = MagicMock()

        processor.run(_file(), token)

        assert seen == [token]


class TestProcessorFailures:
    def test_validation_failure_skips_steps(self) -> None:
        step = _step()
        processor, _ = _make_processor(step, valid=False)

        outcome = processor.process(_file())

        assert outcome.success is False
        assert outcome.error == "File is empty"
        assert outcome.error_kind is ErrorKind.VALIDATION
        assert outcome.extraction is None
        step.run.assert_not_called()

    def test_pipeline_error_keeps_its_kind(self) -> None:
        later = _step()
        processor, _ = _make_processor(
            _step(side_effect=_extract),
            _step(ErrorKind.PARSE, ParseError("Could not extract a usable transaction")),
            later,
        )

        with patch("receipt_ocr.pipeline.processor.Log"):
            outcome = processor.process(_file())

        assert outcome.success is False
        assert outcome.error_kind is ErrorKind.PARSE
        assert outcome.error == "Could not extract a usable transaction"
        assert outcome.processing_time_ms is not None
        later.run.assert_not_called()

    def test_extraction_error(self) -> None:
        processor, _ = _make_processor(_step(side_effect=ExtractionError("PDF document has no pages")))

        with patch("receipt_ocr.pipeline.processor.Log"):
            outcome = processor.process(_file())

        assert outcome.error_kind is ErrorKind.EXTRACTION
        assert outcome.error == "PDF document has no pages"

    def test_unexpected_exception_uses_step_kind(self) -> None:
        processor, _ = _make_processor(
            _step(side_effect=_extract),
            _step(ErrorKind.PARSE, RuntimeError("regex exploded")),
        )

        with patch("receipt_ocr.pipeline.processor.Log") as mock_log:
            outcome = processor.process(_file())

        assert outcome.success is False
        assert outcome.error_kind is ErrorKind.PARSE
        assert outcome.error == "regex exploded"
        assert mock_log.error.call_count == 2

    def test_unexpected_exception_without_message(self) -> None:
        processor, _ = _make_processor(_step(side_effect=KeyError()))

        with patch("receipt_ocr.pipeline.processor.Log"):
            outcome = processor.process(_file())

        assert outcome.error == "KeyError"
        assert outcome.error_kind is ErrorKind.EXTRACTION

    def test_no_extraction_produced(self) -> None:
        processor, _ = _make_processor(_step(side_effect=_extract))

        with patch("receipt_ocr.pipeline.processor.Log"):
            outcome = processor.process(_file())

        assert outcome.success is False
        assert outcome.error_kind is ErrorKind.PARSE


class TestBuildProcessor:
    def test_wires_steps_from_settings(self, settings) -> None:  # type: ignore[no-untyped-def]
        processor = build_processor(settings)

        assert [type(step) for step in processor._steps] == [
            ExtractTextStep,
            ParseTransactionStep,
            CategorizeStep,
        ]

    def test_validate_delegates_to_validator(self) -> None:
        processor, validator = _make_processor()
        file = _file()

        assert processor.validate(file).valid is True
        validator.validate.assert_called_once_with(file)


class TestProcessorValidation:
    def test_rejects_with_real_validator(self) -> None:
        step = _step()
        processor = Processor(
            validator=FileValidator(["application/pdf"], max_size_bytes=1024),
            steps=[step],
        )

        with patch("receipt_ocr.pipeline.processor.Log"):
            outcome = processor.process(UploadedFile.from_bytes(b"", "application/pdf"))

        assert outcome.success is False
        assert outcome.error == "File is empty"
        assert outcome.error_kind is ErrorKind.VALIDATION
        assert outcome.processing_time_ms is None
        step.run.assert_not_called()
