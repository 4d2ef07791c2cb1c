from typing import ClassVar

from receipt_ocr.config.settings import Settings
from receipt_ocr.pipeline.exceptions import FileValidationError
from receipt_ocr.upload.models import UploadedFile, ValidationResult

_MB = 1024 * 1024


class FileValidator:
    """Rejects unacceptable uploads before any expensive work happens."""

    TYPE_LABELS: ClassVar[dict[str, str]] = {
        "image/png": "PNG",
        "image/jpeg": "JPG",
        "image/webp": "WEBP",
        "application/pdf": "PDF",
    }

    def __init__(self, allowed_mime_types: list[str], max_size_bytes: int) -> None:
        self._allowed = [t.lower() for t in allowed_mime_types]
        self._max_size_bytes = max_size_bytes

    @classmethod
    def from_settings(cls, settings: Settings) -> "FileValidator":
        return cls(settings.allowed_mime_types, settings.max_file_size_bytes)

    def validate(self, file: UploadedFile) -> ValidationResult:
        """Check media type, then size. Never raises."""
        mime_type = (file.mime_type or "").lower()
        if mime_type not in self._allowed:
            return ValidationResult(
                valid=False,
                error=f"Only {self._describe_allowed()} files are supported "
                f"(got '{file.mime_type or 'unknown'}')",
            )
        if file.size_bytes <= 0:
            return ValidationResult(valid=False, error="File is empty")
        if file.size_bytes > self._max_size_bytes:
            return ValidationResult(
                valid=False,
                error=f"File is too large ({file.size_bytes / _MB:.1f}MB). "
                f"Maximum size is {self._max_size_bytes / _MB:g}MB",
            )
        return ValidationResult(valid=True)

    def ensure_valid(self, file: UploadedFile) -> None:
        """Raise FileValidationError with the first violated constraint."""
        result = self.validate(file)
        if not result.valid:
            raise FileValidationError(result.error or "Invalid file")

    def _describe_allowed(self) -> str:
        labels = [self.TYPE_LABELS.get(t, t) for t in self._allowed]
        if len(labels) == 1:
            return labels[0]
        return f"{', '.join(labels[:-1])}, and {labels[-1]}"
