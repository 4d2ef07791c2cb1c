import threading

from receipt_ocr.config.settings import Settings
from receipt_ocr.extraction.cancellation import CancellationToken
from receipt_ocr.logging.logger import Log
from receipt_ocr.parsing.models import ParsedTransaction
from receipt_ocr.pipeline.exceptions import AttemptInProgressError, ErrorKind
from receipt_ocr.pipeline.models import ExtractionOutcome
from receipt_ocr.pipeline.processor import Processor, build_processor
from receipt_ocr.pipeline.state import (
    IDLE_STATE,
    AttemptFailed,
    AttemptRejected,
    AttemptStarted,
    AttemptSucceeded,
    Back,
    Event,
    PipelineState,
    Reset,
    Step,
    transition,
)
from receipt_ocr.upload.models import UploadedFile


class ExtractionController:
    """Drives one file at a time through the pipeline: idle -> processing -> preview | error.

    Single-flight: selecting a file while an attempt is processing is
    rejected. Each attempt carries a generation number; ``reset()`` bumps it
    and cancels the in-flight token, so a superseded attempt's late result
    is dropped instead of overwriting newer state.
    """

    def __init__(self, processor: Processor, timeout_seconds: float | None = None) -> None:
        self._processor = processor
        self._timeout_seconds = timeout_seconds
        self._lock = threading.Lock()
        self._state = IDLE_STATE
        self._generation = 0
        self._token: CancellationToken | None = None

    @property
    def state(self) -> PipelineState:
        with self._lock:
            return self._state

    @property
    def step(self) -> Step:
        return self.state.step

    def select_file(self, file: UploadedFile) -> PipelineState:
        """Run a full attempt for ``file`` and return the resulting state.

        Raises:
            AttemptInProgressError: if another attempt is still processing.
        """
        with self._lock:
            if self._state.step is Step.PROCESSING:
                raise AttemptInProgressError(
                    "An extraction is already in progress; wait for it or reset"
                )
            validation = self._processor.validate(file)
            if not validation.valid:
                Log.info(f"Rejected upload {file.filename or ''}: {validation.error}")
                self._apply(AttemptRejected(file, validation.error or "Invalid file"))
                return self._state
            self._generation += 1
            generation = self._generation
            token = CancellationToken(self._timeout_seconds)
            self._token = token
            self._apply(AttemptStarted(file))

        Log.info(
            f"Processing {file.mime_type} upload ({file.size_bytes} bytes), "
            f"attempt {generation}"
        )
        outcome = self._processor.run(file, token)
        return self._finish(generation, outcome)

    def apply_extraction(self) -> ParsedTransaction | None:
        """Return the previewed extraction; persisting it is the caller's job."""
        return self.state.extraction

    def back(self) -> PipelineState:
        with self._lock:
            self._apply(Back())
            return self._state

    def reset(self) -> PipelineState:
        with self._lock:
            if self._token is not None:
                self._token.cancel()
                self._token = None
            self._generation += 1
            self._apply(Reset())
            return self._state

    def _finish(self, generation: int, outcome: ExtractionOutcome) -> PipelineState:
        with self._lock:
            if generation != self._generation:
                Log.warning(f"Discarding stale result of attempt {generation}")
                return self._state
            self._token = None
            if outcome.success and outcome.extraction is not None:
                self._apply(
                    AttemptSucceeded(
                        raw_text=outcome.raw_text or "",
                        extraction=outcome.extraction,
                        processing_time_ms=outcome.processing_time_ms or 0,
                    )
                )
            else:
                self._apply(
                    AttemptFailed(
                        error=outcome.error or "Failed to process document",
                        kind=outcome.error_kind or ErrorKind.EXTRACTION,
                    )
                )
            Log.info(f"Attempt {generation} finished in step {self._state.step.value}")
            return self._state

    def _apply(self, event: Event) -> None:
        self._state = transition(self._state, event)


def build_controller(settings: Settings) -> ExtractionController:
    return ExtractionController(
        processor=build_processor(settings),
        timeout_seconds=settings.extraction_timeout_seconds or None,
    )
