from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    allowed_mime_types: list[str] = [
        "image/png",
        "image/jpeg",
        "image/webp",
        "application/pdf",
    ]
    max_file_size_bytes: int = 10 * 1024 * 1024

    pdf_engine: str = "pdfplumber"
    ocr_engine: str = "tesseract"
    tesseract_cmd: str = ""
    ocr_language: str = "eng"
    extraction_timeout_seconds: float = 60.0

    locale: str = "id"
    description_max_length: int = 50

    category_keywords_path: str = ""
    category_classifier: str = "none"
    categorization_max_workers: int = 8
