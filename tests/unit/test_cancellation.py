from receipt_ocr.extraction.cancellation import CancellationToken


class TestCancellationToken:
    def test_fresh_token_is_not_cancelled(self) -> None:
        token = CancellationToken()
        assert not token.cancelled
        assert token.remaining() is None

    def test_cancel_sets_flag(self) -> None:
        token = CancellationToken()
        token.cancel()
        assert token.cancelled
        assert token.reason() == "Text extraction cancelled"

    def test_deadline_expires(self) -> None:
        token = CancellationToken(timeout_seconds=0)
        assert token.cancelled
        assert token.expired
        assert token.remaining() == 0.0
        assert token.reason() == "Text extraction timed out after 0s"

    def test_remaining_is_bounded_by_timeout(self) -> None:
        token = CancellationToken(timeout_seconds=60)
        remaining = token.remaining()
        assert remaining is not None
        assert 0 < remaining <= 60
        assert not token.cancelled
