"""Tests for required-field validation of contact and career submissions."""
from pathlib import Path

import pytest

from app.core.errors import ValidationError
from app.schemas.submission import FileRef, SubmissionKind
from app.services.form_validator import validate_career, validate_contact


@pytest.fixture()
def resume():
    return FileRef(
        original_name="cv.pdf",
        stored_path=Path("/tmp/uploads/1-abcd1234-cv.pdf"),
        media_type="application/pdf",
        size_bytes=10,
    )


class TestValidateContact:
    def test_valid(self):
        submission = validate_contact("Juan", "juan@example.com", "Hola")

        assert submission.kind is SubmissionKind.CONTACT
        assert submission.name == "Juan"
        assert submission.email == "juan@example.com"
        assert submission.message == "Hola"
        assert submission.attachment is None

    def test_strips_whitespace(self):
        submission = validate_contact("  Juan ", " juan@example.com", "Hola\n")
        assert submission.name == "Juan"
        assert submission.email == "juan@example.com"
        assert submission.message == "Hola"

    def test_all_missing(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_contact(None, "", "  ")

        assert exc_info.value.fields == ["name", "email", "message"]
        assert exc_info.value.status_code == 400
        assert str(exc_info.value) == "Missing required fields: name, email, message"

    def test_invalid_email(self):
        with pytest.raises(ValidationError, match="Invalid email address"):
            validate_contact("Juan", "juan@", "Hola")


class TestValidateCareer:
    def test_valid_with_message(self, resume):
        submission = validate_career("Ana Gomez", "ana@example.com", "Hi", resume)

        assert submission.kind is SubmissionKind.CAREER
        assert submission.name == "Ana Gomez"
        assert submission.message == "Hi"
        assert submission.attachment == resume

    @pytest.mark.parametrize("message", [None, "", "   "])
    def test_message_defaults_to_na(self, resume, message):
        submission = validate_career("Ana Gomez", "ana@example.com", message, resume)
        assert submission.message == "N/A"

    def test_resume_required(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_career("Ana Gomez", "ana@example.com", None, None)
        assert exc_info.value.fields == ["resume"]

    def test_names_form_fields(self, resume):
        with pytest.raises(ValidationError) as exc_info:
            validate_career("", None, None, resume)
        assert exc_info.value.fields == ["fullName", "email"]
