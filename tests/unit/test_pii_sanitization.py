"""Tests for PII redaction applied to every log record."""
from app.core.sanitizer import redact_pii


class TestRedactPii:
    def test_email_redacted(self):
        assert "user@example.com" not in redact_pii("Contact user@example.com for info")
        assert "u***@example.com" in redact_pii("Contact user@example.com for info")

    def test_plus_address_redacted(self):
        result = redact_pii("Reply to ana+jobs@example.com")
        assert "ana+jobs" not in result
        assert "***@example.com" in result

    def test_ipv4_redacted(self):
        result = redact_pii("Client IP: 192.168.1.100")
        assert "192.168.1.100" not in result
        assert "192.168.1.***" in result

    def test_password_redacted(self):
        result = redact_pii("password=supersecret123")
        assert "supersecret123" not in result
        assert "[REDACTED]" in result

    def test_smtp_pass_redacted(self):
        result = redact_pii("EMAIL_PASS: abcd-efgh")
        assert "abcd-efgh" not in result

    def test_non_string_handled(self):
        assert redact_pii(12345) == "12345"
        assert redact_pii(None) == "None"

    def test_clean_message_unchanged(self):
        msg = "Resume stored filename=cv.pdf size=2048"
        assert redact_pii(msg) == msg
