import os
import tempfile

# Minimal environment setup before the app (and its Settings) is imported
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "formrelay-test-logs"))

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from app.core.config import settings
from app.core.email import reset_mail_client
from app.main import app


class FakeMailClient:
    """Records messages instead of talking to an SMTP server."""

    def __init__(self, error: Optional[Exception] = None):
        self.sent: List = []
        self.error = error

    async def send(self, message) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(message)


@pytest.fixture()
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(path))
    return path


@pytest.fixture()
def mail_settings(monkeypatch):
    monkeypatch.setattr(settings, "EMAIL_USER", "relay@example.com")
    monkeypatch.setattr(settings, "EMAIL_PASS", SecretStr("app-password"))
    monkeypatch.setattr(settings, "MAIL_RECIPIENT", None)
    monkeypatch.setattr(settings, "RETAIN_UPLOADS", False)
    monkeypatch.setattr(settings, "DEBUG", False)
    yield settings
    reset_mail_client()


@pytest.fixture()
def mail_client():
    return FakeMailClient()


@pytest.fixture()
def client(mail_settings, upload_dir, mail_client, monkeypatch):
    """
    TestClient whose lifespan injects the fake mail client.
    The 'with' block runs startup, which creates the holding directory.
    """
    monkeypatch.setattr("app.main.get_mail_client", lambda: mail_client)

    with TestClient(app) as c:
        yield c
