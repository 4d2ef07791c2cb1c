import io
from collections.abc import Callable

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from receipt_ocr.config.settings import Settings


def build_pdf(pages: list[list[str]]) -> bytes:
    """Render one PDF page per entry, one text line per string."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 20
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def make_pdf() -> Callable[[list[list[str]]], bytes]:
    return build_pdf


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return build_pdf([["Hello PDF World"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a three-page PDF with known text on each page."""
    return build_pdf([["Page one content"], ["Page two content"], ["Page three content"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return build_pdf([[]])


@pytest.fixture()
def receipt_pdf_bytes() -> bytes:
    """Generate a one-page Indonesian receipt."""
    return build_pdf([["Warung Makan Sederhana", "Tanggal: 12/03/2024", "Total Rp 150.000"]])


@pytest.fixture()
def png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (120, 40), color="white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    for name in ("LOCALE", "PDF_ENGINE", "OCR_ENGINE", "CATEGORY_CLASSIFIER"):
        monkeypatch.delenv(name, raising=False)
    return Settings(_env_file=None)
