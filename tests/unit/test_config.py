"""Tests for environment-driven settings and their production guardrails."""
import pytest
from pydantic import SecretStr, ValidationError

from app.core.config import LOCAL_ORIGINS, Settings


def test_defaults():
    fields = Settings.model_fields

    assert fields["PORT"].default == 5000
    assert fields["API_PREFIX"].default == "/api"
    assert fields["MAX_UPLOAD_BYTES"].default == 5 * 1024 * 1024
    assert fields["RETAIN_UPLOADS"].default is False


def test_local_origins_default():
    s = Settings(ENVIRONMENT="local", ALLOWED_ORIGINS=[])
    assert s.ALLOWED_ORIGINS == LOCAL_ORIGINS


def test_explicit_origins_kept():
    s = Settings(ENVIRONMENT="local", ALLOWED_ORIGINS=["https://www.example.com"])
    assert s.ALLOWED_ORIGINS == ["https://www.example.com"]


def test_recipient_falls_back_to_account():
    s = Settings(ENVIRONMENT="local", EMAIL_USER="relay@example.com")
    assert s.mail_recipient == "relay@example.com"

    s = Settings(
        ENVIRONMENT="local",
        EMAIL_USER="relay@example.com",
        MAIL_RECIPIENT="hr@example.com",
    )
    assert s.mail_recipient == "hr@example.com"


def test_mail_configured_requires_user_and_password():
    assert not Settings(ENVIRONMENT="local", EMAIL_USER="relay@example.com").mail_configured
    assert Settings(
        ENVIRONMENT="local",
        EMAIL_USER="relay@example.com",
        EMAIL_PASS=SecretStr("pw"),
    ).mail_configured


def test_production_requires_mail_account():
    with pytest.raises(ValidationError, match="EMAIL_USER and EMAIL_PASS"):
        Settings(
            ENVIRONMENT="production",
            ALLOWED_ORIGINS=["https://www.example.com"],
            EMAIL_USER=None,
            EMAIL_PASS=None,
        )


def test_production_requires_explicit_origins():
    with pytest.raises(ValidationError, match="ALLOWED_ORIGINS"):
        Settings(
            ENVIRONMENT="production",
            ALLOWED_ORIGINS=[],
            EMAIL_USER="relay@example.com",
            EMAIL_PASS=SecretStr("pw"),
        )


def test_production_ok():
    s = Settings(
        ENVIRONMENT="production",
        ALLOWED_ORIGINS=["https://www.example.com"],
        EMAIL_USER="relay@example.com",
        EMAIL_PASS=SecretStr("pw"),
    )
    assert s.mail_configured
