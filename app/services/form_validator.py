from __future__ import annotations

from typing import Dict, Optional

from email_validator import EmailNotValidError, validate_email

from app.core.errors import ValidationError
from app.schemas.submission import FileRef, Submission, SubmissionKind

DEFAULT_CAREER_MESSAGE = "N/A"


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


def _require(fields: Dict[str, str]) -> None:
    missing = [label for label, value in fields.items() if not value]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}", fields=missing
        )


def _check_email(email: str) -> str:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValidationError("Invalid email address", fields=["email"]) from exc
    return email


def validate_contact(
    name: Optional[str], email: Optional[str], message: Optional[str]
) -> Submission:
    """Build a contact submission; name, email and message are all required."""
    values = {"name": _clean(name), "email": _clean(email), "message": _clean(message)}
    _require(values)

    return Submission(
        kind=SubmissionKind.CONTACT,
        name=values["name"],
        email=_check_email(values["email"]),
        message=values["message"],
    )


def validate_career(
    full_name: Optional[str],
    email: Optional[str],
    message: Optional[str],
    attachment: Optional[FileRef],
) -> Submission:
    """Build a career submission.

    ``fullName``, ``email`` and an uploaded ``resume`` are required. A blank
    message is replaced by ``"N/A"``.
    """
    values = {"fullName": _clean(full_name), "email": _clean(email)}
    missing = [label for label, value in values.items() if not value]
    if attachment is None:
        missing.append("resume")
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}", fields=missing
        )

    return Submission(
        kind=SubmissionKind.CAREER,
        name=values["fullName"],
        email=_check_email(values["email"]),
        message=_clean(message) or DEFAULT_CAREER_MESSAGE,
        attachment=attachment,
    )
