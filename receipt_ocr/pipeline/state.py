"""Extraction lifecycle as an explicit state machine.

``transition`` is a pure function of (state, event); the controller is the
only caller that stores its result.
"""

from dataclasses import dataclass
from enum import Enum

from receipt_ocr.parsing.models import ParsedTransaction
from receipt_ocr.pipeline.exceptions import ErrorKind, InvalidTransitionError
from receipt_ocr.upload.models import UploadedFile


class Step(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    PREVIEW = "preview"
    ERROR = "error"


@dataclass(frozen=True)
class PipelineState:
    step: Step = Step.IDLE
    file: UploadedFile | None = None
    raw_text: str | None = None
    extraction: ParsedTransaction | None = None
    processing_time_ms: int | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "step": self.step.value,
            "file": self.file.filename if self.file is not None else None,
            "raw_text": self.raw_text,
            "extraction": self.extraction.to_dict() if self.extraction is not None else None,
            "processing_time_ms": self.processing_time_ms,
            "error": self.error,
            "error_kind": self.error_kind.value if self.error_kind is not None else None,
        }


@dataclass(frozen=True)
class AttemptRejected:
    file: UploadedFile
    error: str
    kind: ErrorKind = ErrorKind.VALIDATION


@dataclass(frozen=True)
class AttemptStarted:
    file: UploadedFile


@dataclass(frozen=True)
class AttemptSucceeded:
    raw_text: str
    extraction: ParsedTransaction
    processing_time_ms: int


@dataclass(frozen=True)
class AttemptFailed:
    error: str
    kind: ErrorKind


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class Reset:
    pass


Event = AttemptRejected | AttemptStarted | AttemptSucceeded | AttemptFailed | Back | Reset

IDLE_STATE = PipelineState()

_CAN_START = frozenset({Step.IDLE, Step.PREVIEW, Step.ERROR})
_TERMINAL = frozenset({Step.PREVIEW, Step.ERROR})


def transition(state: PipelineState, event: Event) -> PipelineState:
    """Return the state that follows ``event``.

    Raises:
        InvalidTransitionError: if ``event`` is not allowed in ``state.step``.
    """
    if isinstance(event, Reset):
        return IDLE_STATE
    if isinstance(event, Back):
        _require(state, _TERMINAL, "go back")
        return IDLE_STATE
    if isinstance(event, AttemptRejected):
        _require(state, _CAN_START, "select a file")
        return PipelineState(
            step=Step.ERROR, file=event.file, error=event.error, error_kind=event.kind
        )
    if isinstance(event, AttemptStarted):
        _require(state, _CAN_START, "select a file")
        return PipelineState(step=Step.PROCESSING, file=event.file)
    if isinstance(event, AttemptSucceeded):
        _require(state, {Step.PROCESSING}, "complete an attempt")
        return PipelineState(
            step=Step.PREVIEW,
            file=state.file,
            raw_text=event.raw_text,
            extraction=event.extraction,
            processing_time_ms=event.processing_time_ms,
        )
    if isinstance(event, AttemptFailed):
        _require(state, {Step.PROCESSING}, "fail an attempt")
        return PipelineState(
            step=Step.ERROR, file=state.file, error=event.error, error_kind=event.kind
        )
    raise InvalidTransitionError(f"Unknown event {event!r}")


def _require(state: PipelineState, allowed: frozenset[Step] | set[Step], action: str) -> None:
    if state.step not in allowed:
        raise InvalidTransitionError(f"Cannot {action} while {state.step.value}")
