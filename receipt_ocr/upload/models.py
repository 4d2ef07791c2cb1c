from dataclasses import dataclass, field
from pathlib import Path
import mimetypes


@dataclass(frozen=True)
class UploadedFile:
    """A user upload as received by the pipeline (content + declared metadata)."""

    content: bytes = field(repr=False)
    mime_type: str
    size_bytes: int
    filename: str | None = None

    @classmethod
    def from_bytes(
        cls,
        content: bytes,
        mime_type: str,
        filename: str | None = None,
    ) -> "UploadedFile":
        return cls(
            content=content,
            mime_type=mime_type,
            size_bytes=len(content),
            filename=filename,
        )

    @classmethod
    def from_path(cls, path: Path, mime_type: str | None = None) -> "UploadedFile":
        """Read a file from disk, guessing the media type from its extension."""
        if mime_type is None:
            mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls.from_bytes(path.read_bytes(), mime_type, filename=path.name)


@dataclass(frozen=True)
class ValidationResult:
    """Output of the file validator: valid, or the first violated constraint."""

    valid: bool
    error: str | None = None
