import shutil
from collections.abc import Callable
from datetime import date
from decimal import Decimal

import pytest

from receipt_ocr.config.settings import Settings
from receipt_ocr.pipeline.controller import ExtractionController, build_controller
from receipt_ocr.pipeline.exceptions import ErrorKind
from receipt_ocr.pipeline.state import IDLE_STATE, Step
from receipt_ocr.upload.models import UploadedFile


def _pdf(content: bytes) -> UploadedFile:
    return UploadedFile.from_bytes(content, "application/pdf", filename="receipt.pdf")


@pytest.mark.integration
class TestReceiptPdf:
    def test_receipt_reaches_preview(
        self, controller: ExtractionController, receipt_pdf_bytes: bytes
    ) -> None:
        state = controller.select_file(_pdf(receipt_pdf_bytes))

        assert state.step is Step.PREVIEW, state.error
        assert state.extraction is not None
        assert state.extraction.amount == Decimal("150000")
        assert state.extraction.date == date(2024, 3, 12)
        assert state.extraction.description == "Warung Makan Sederhana"
        assert state.extraction.category == "Makanan"
        assert state.extraction.currency == "IDR"
        assert state.processing_time_ms is not None
        assert state.processing_time_ms >= 0
        assert "Rp 150.000" in (state.raw_text or "")

    def test_apply_then_reset(
        self, controller: ExtractionController, receipt_pdf_bytes: bytes
    ) -> None:
        controller.select_file(_pdf(receipt_pdf_bytes))

        applied = controller.apply_extraction()

        assert applied is not None
        assert applied.amount == Decimal("150000")
        assert controller.reset() == IDLE_STATE

    def test_multi_page_statement_uses_total(
        self, controller: ExtractionController, make_pdf: Callable[[list[list[str]]], bytes]
    ) -> None:
        content = make_pdf(
            [
                ["Toko Buku Gramedia", "Tanggal: 01/02/2024"],
                ["Buku Tulis 15.000", "Pensil 5.000", "Total Rp 20.000"],
            ]
        )

        state = controller.select_file(_pdf(content))

        assert state.step is Step.PREVIEW, state.error
        assert state.extraction is not None
        assert state.extraction.amount == Decimal("20000")
        assert state.extraction.date == date(2024, 2, 1)


@pytest.mark.integration
class TestPdfFailures:
    def test_corrupt_pdf_is_extraction_error(self, controller: ExtractionController) -> None:
        state = controller.select_file(_pdf(b"%PDF-1.4 definitely not a pdf"))

        assert state.step is Step.ERROR
        assert state.error_kind is ErrorKind.EXTRACTION
        assert state.extraction is None

    def test_blank_pdf_is_extraction_error(
        self, controller: ExtractionController, empty_pdf_bytes: bytes
    ) -> None:
        state = controller.select_file(_pdf(empty_pdf_bytes))

        assert state.step is Step.ERROR
        assert state.error_kind is ErrorKind.EXTRACTION
        assert state.error is not None
        assert state.error.startswith("No text could be extracted")

    def test_date_only_pdf_is_parse_error(
        self, controller: ExtractionController, make_pdf: Callable[[list[list[str]]], bytes]
    ) -> None:
        state = controller.select_file(_pdf(make_pdf([["12/03/2024"]])))

        assert state.step is Step.ERROR
        assert state.error_kind is ErrorKind.PARSE

    def test_error_then_retry(
        self, controller: ExtractionController, receipt_pdf_bytes: bytes
    ) -> None:
        controller.select_file(_pdf(b"%PDF-1.4 broken"))
        assert controller.back() == IDLE_STATE

        state = controller.select_file(_pdf(receipt_pdf_bytes))

        assert state.step is Step.PREVIEW


@pytest.mark.integration
class TestEnglishLocale:
    def test_english_receipt(
        self, settings: Settings, make_pdf: Callable[[list[list[str]]], bytes]
    ) -> None:
        controller = build_controller(settings.model_copy(update={"locale": "en"}))
        content = make_pdf([["STARBUCKS COFFEE", "Date: 03/12/2024", "Latte 4.50", "Total $4.50"]])

        state = controller.select_file(_pdf(content))

        assert state.step is Step.PREVIEW, state.error
        assert state.extraction is not None
        assert state.extraction.amount == Decimal("4.50")
        assert state.extraction.date == date(2024, 3, 12)
        assert state.extraction.category == "Food & Dining"
        assert state.extraction.currency == "USD"


@pytest.mark.integration
@pytest.mark.skipif(shutil.which("tesseract") is None, reason="tesseract binary not installed")
class TestImageUpload:
    def test_blank_image_is_extraction_error(self, settings: Settings, png_bytes: bytes) -> None:
        controller = build_controller(settings)

        state = controller.select_file(UploadedFile.from_bytes(png_bytes, "image/png"))

        assert state.step is Step.ERROR
        assert state.error_kind is ErrorKind.EXTRACTION
