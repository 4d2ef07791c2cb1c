import pytest

from receipt_ocr.config.settings import Settings
from receipt_ocr.pipeline.controller import ExtractionController, build_controller


@pytest.fixture(params=["pdfplumber", "pymupdf"])
def pdf_settings(request: pytest.FixtureRequest, settings: Settings) -> Settings:
    return settings.model_copy(update={"pdf_engine": request.param})


@pytest.fixture()
def controller(pdf_settings: Settings) -> ExtractionController:
    return build_controller(pdf_settings)
