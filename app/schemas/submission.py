from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel


class SubmissionKind(str, Enum):
    CONTACT = "contact"
    CAREER = "career"


class FileRef(BaseModel):
    """A resume stored in the holding directory for one request."""

    original_name: str
    stored_path: Path
    media_type: str
    size_bytes: int


class Submission(BaseModel):
    """One validated form entry, alive for the duration of a request."""

    kind: SubmissionKind
    name: str
    email: str
    message: str
    attachment: Optional[FileRef] = None
