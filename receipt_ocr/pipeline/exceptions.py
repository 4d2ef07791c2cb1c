from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation_error"
    EXTRACTION = "extraction_error"
    PARSE = "parse_error"


class PipelineError(Exception):
    """Base exception for all pipeline failures; carries a machine-readable kind."""

    kind: ErrorKind = ErrorKind.EXTRACTION


class FileValidationError(PipelineError):
    """Raised when an upload has an unsupported media type or size."""

    kind = ErrorKind.VALIDATION


class ExtractionError(PipelineError):
    """Raised when no text could be pulled out of the document."""

    kind = ErrorKind.EXTRACTION


class ParseError(PipelineError):
    """Raised when text was extracted but no usable transaction was found."""

    kind = ErrorKind.PARSE


class InvalidTransitionError(Exception):
    """Raised when a controller operation is not allowed in the current step."""


class AttemptInProgressError(InvalidTransitionError):
    """Raised when a file is selected while another attempt is processing."""
