"""Tests for PII masking and request summaries."""

import logging

from cto_coach.core.logging import CleanFileHandler, log_request, mask_pii, strip_ansi


class TestMaskPII:
    """PII masking of user text."""

    def test_email_keeps_domain(self):
        masked, detected = mask_pii("Contact jane.doe@example.com please")
        assert masked == "Contact ***@example.com please"
        assert detected == ["email"]

    def test_phone_keeps_last_digits(self):
        masked, detected = mask_pii("call 555-123-4567")
        assert masked == "call ***4567"
        assert detected == ["phone"]

    def test_api_key(self):
        masked, detected = mask_pii("my key is sk-abcdefghijklmnopqrstuv")
        assert masked == "my key is ***"
        assert detected == ["api_key"]

    def test_clean_text_unchanged(self):
        assert mask_pii("How do I scale my team?") == ("How do I scale my team?", [])


class TestLogRequest:
    """One-line chat turn summaries."""

    def test_success_line(self, caplog):
        with caplog.at_level(logging.INFO, logger="request"):
            line = log_request(
                "POST",
                "/api/chat/message",
                session_id="12345678-aaaa-bbbb-cccc-123456789012",
                user_message="Email me at cto@startup.io",
                document_count=3,
                duration_ms=41.7,
            )

        assert line.startswith("[POST] /api/chat/message session=12345678...")
        assert "INPUT: Email me at ***@startup.io" in line
        assert "| PII: email" in line
        assert "| DOCS: 3" in line
        assert "| 42ms" in line
        assert line.endswith("| SUCCESS")
        assert line in caplog.messages

    def test_error_line(self):
        line = log_request("POST", "/api/chat/message", status="error", error="quota exceeded")
        assert "| ERROR |" in line
        assert line.endswith("ERROR: quota exceeded")

    def test_long_input_truncated(self):
        line = log_request("POST", "/api/chat/message", user_message="x" * 1000)
        assert "x" * 300 + "..." in line
        assert "x" * 301 not in line


class TestCleanFileHandler:
    """Plain-text file output."""

    def test_strips_ansi_codes(self, tmp_path):
        path = tmp_path / "app.log"
        handler = CleanFileHandler(path)
        handler.setFormatter(logging.Formatter("%(message)s"))
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "\x1b[32mgreen\x1b[0m", None, None)

        handler.emit(record)

        assert path.read_text(encoding="utf-8") == "green\n"
        assert strip_ansi("\x1b[1mbold\x1b[0m") == "bold"
