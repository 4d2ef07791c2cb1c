import time
from unittest.mock import patch

import pytesseract

from receipt_ocr.extraction.cancellation import CancellationToken
from receipt_ocr.ocr.tesseract_adapter import TesseractAdapter

_IMAGE_TO_STRING = "receipt_ocr.ocr.tesseract_adapter.pytesseract.image_to_string"


class TestTesseractAdapter:
    def test_returns_recognized_text(self, png_bytes: bytes) -> None:
        with patch(_IMAGE_TO_STRING, return_value="STARBUCKS\nTotal $5.00\n") as mock_ocr:
            result = TesseractAdapter(language="eng").recognize(png_bytes)

        assert result.error is None
        assert result.text == "STARBUCKS\nTotal $5.00\n"
        assert mock_ocr.call_args.kwargs["lang"] == "eng"

    def test_passes_remaining_time_as_timeout(self, png_bytes: bytes) -> None:
        token = CancellationToken(timeout_seconds=30)
        with patch(_IMAGE_TO_STRING, return_value="text") as mock_ocr:
            TesseractAdapter().recognize(png_bytes, token)

        timeout = mock_ocr.call_args.kwargs["timeout"]
        assert 0 < timeout <= 30

    def test_no_token_means_no_timeout(self, png_bytes: bytes) -> None:
        with patch(_IMAGE_TO_STRING, return_value="text") as mock_ocr:
            TesseractAdapter().recognize(png_bytes)

        assert "timeout" not in mock_ocr.call_args.kwargs

    def test_invalid_image_returns_error(self) -> None:
        result = TesseractAdapter().recognize(b"not an image")
        assert result.text == ""
        assert result.error is not None
        assert "Could not open image" in result.error

    def test_missing_binary_returns_error(self, png_bytes: bytes) -> None:
        with patch(_IMAGE_TO_STRING, side_effect=pytesseract.TesseractNotFoundError()):
            result = TesseractAdapter().recognize(png_bytes)

        assert result.error is not None
        assert "not found" in result.error

    def test_backend_failure_returns_error(self, png_bytes: bytes) -> None:
        with patch(_IMAGE_TO_STRING, side_effect=RuntimeError("boom")):
            result = TesseractAdapter().recognize(png_bytes)

        assert result.error == "Image OCR failed: boom"

    def test_cancelled_token_skips_recognition(self, png_bytes: bytes) -> None:
        token = CancellationToken()
        token.cancel()
        with patch(_IMAGE_TO_STRING) as mock_ocr:
            result = TesseractAdapter().recognize(png_bytes, token)

        mock_ocr.assert_not_called()
        assert result.error == "Text extraction cancelled"

    def test_deadline_passed_while_decoding_skips_recognition(self, png_bytes: bytes) -> None:
        token = CancellationToken(timeout_seconds=0.05)
        adapter = TesseractAdapter()
        load_image = adapter._load_image

        def slow_load(image_bytes: bytes):  # type: ignore[no-untyped-def]
            time.sleep(0.1)
            return load_image(image_bytes)

        with patch.object(adapter, "_load_image", side_effect=slow_load), patch(
            _IMAGE_TO_STRING, return_value="x"
        ) as mock_ocr:
            result = adapter.recognize(png_bytes, token)

        mock_ocr.assert_not_called()
        assert result.text == ""
        assert result.error == "Text extraction timed out after 0.05s"

    def test_never_passes_unbounded_timeout_with_deadline(self, png_bytes: bytes) -> None:
        token = CancellationToken(timeout_seconds=5)
        with patch(_IMAGE_TO_STRING, return_value="text") as mock_ocr:
            TesseractAdapter().recognize(png_bytes, token)

        assert mock_ocr.call_args.kwargs["timeout"] > 0
