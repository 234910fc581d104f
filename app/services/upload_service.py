from __future__ import annotations

import logging
import secrets
import time
from pathlib import Path
from typing import Optional, Union

import anyio
from fastapi import UploadFile

from app.core.errors import UnsupportedFileType, UploadTooLarge
from app.schemas.submission import FileRef

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".pdf", ".doc", ".docx"}
ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
CHUNK_SIZE = 64 * 1024
UNSUPPORTED_MESSAGE = "Only PDF, DOC and DOCX files are allowed"
MAX_FILENAME_BYTES = 255


def unique_filename(original_name: str) -> str:
    """Timestamp plus a random token, so identical names never collide.

    The stem is shortened so the stored name stays within MAX_FILENAME_BYTES;
    the extension is always kept.
    """
    prefix = f"{int(time.time() * 1000)}-{secrets.token_hex(4)}-"
    path = Path(original_name)
    suffix = path.suffix
    budget = MAX_FILENAME_BYTES - len(prefix.encode()) - len(suffix.encode())
    stem = path.stem.encode()[:budget].decode("utf-8", errors="ignore")
    return f"{prefix}{stem}{suffix}"


class UploadHandler:
    """Validates resume uploads and writes them to the holding directory."""

    def __init__(self, directory: Union[str, Path], max_bytes: int):
        self.directory = Path(directory)
        self.max_bytes = max_bytes

    def ensure_directory(self) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    def _validate_type(self, filename: str, content_type: Optional[str]) -> str:
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise UnsupportedFileType(UNSUPPORTED_MESSAGE)
        media_type = (content_type or "").split(";")[0].strip().lower()
        if media_type not in ALLOWED_CONTENT_TYPES:
            raise UnsupportedFileType(UNSUPPORTED_MESSAGE)
        return media_type

    async def store(self, upload: Optional[UploadFile]) -> Optional[FileRef]:
        """Persist ``upload`` and return its reference.

        Returns None when no file was sent, so the form validator can report
        the resume as missing.
        """
        if upload is None or not upload.filename:
            return None

        original_name = Path(upload.filename.replace("\\", "/")).name
        if not original_name:
            return None
        media_type = self._validate_type(original_name, upload.content_type)

        stored_path = self.directory / unique_filename(original_name)
        size = 0
        created = False
        try:
            async with await anyio.open_file(stored_path, "xb") as target:
                created = True
                while chunk := await upload.read(CHUNK_SIZE):
                    size += len(chunk)
                    if size > self.max_bytes:
                        raise UploadTooLarge(
                            f"File exceeds the {self.max_bytes} byte upload limit"
                        )
                    await target.write(chunk)
        except BaseException as exc:
            # Never leave a partial file behind
            if created:
                await anyio.Path(stored_path).unlink(missing_ok=True)
            if isinstance(exc, UploadTooLarge):
                logger.warning(
                    "Rejected oversized upload filename=%s limit=%s",
                    original_name,
                    self.max_bytes,
                )
            else:
                logger.error(
                    "Resume write failed filename=%s error=%s", original_name, exc
                )
            raise

        logger.info(
            "Resume stored filename=%s stored_as=%s size=%s",
            original_name,
            stored_path.name,
            size,
        )
        return FileRef(
            original_name=original_name,
            stored_path=stored_path,
            media_type=media_type,
            size_bytes=size,
        )

    async def discard(self, file_ref: Optional[FileRef]) -> None:
        if file_ref is None:
            return
        await anyio.Path(file_ref.stored_path).unlink(missing_ok=True)
        logger.info("Resume purged stored_as=%s", file_ref.stored_path.name)
