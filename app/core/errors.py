"""
=============================================================================
FORMRELAY - ERROR HANDLING MODULE
=============================================================================
Error taxonomy and global exception handlers.

Every failure leaves the API as ``{"error": "<message>"}``:
- ValidationError       -> 400 (missing/invalid form fields)
- UnsupportedFileType   -> 400 (resume outside the allow-list)
- UploadTooLarge        -> 413 (resume over MAX_UPLOAD_BYTES)
- DeliveryError         -> 500 (mail transport failure)
- anything else         -> 500, traceback logged server-side only

Usage:
    # In main.py
    from app.core.errors import register_exception_handlers
    register_exception_handlers(app)
=============================================================================
"""

import logging
import traceback
from typing import Optional, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import settings

logger = logging.getLogger(__name__)


class RelayError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(RelayError):
    """Required form fields are missing or invalid."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, fields: Sequence[str] = ()):
        super().__init__(message)
        self.fields = list(fields)


class UnsupportedFileType(RelayError):
    """Uploaded file extension or media type is not allowed."""

    status_code = status.HTTP_400_BAD_REQUEST


class UploadTooLarge(RelayError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


class DeliveryError(RelayError):
    """The mail transport failed; ``cause`` holds the transport's exception."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        content = {"error": exc.message}
        if settings.DEBUG and isinstance(exc, DeliveryError) and exc.cause:
            content["detail"] = f"{type(exc.cause).__name__}: {exc.cause}"
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ):
        errors = exc.errors()
        message = "Invalid request body"
        if errors:
            first = errors[0]
            loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"Invalid request body: {first.get('msg', 'invalid value')}"
            if loc:
                message = f"{message} ({loc})"
        logger.warning(
            "Rejected malformed request id=%s path=%s errors=%s",
            _request_id(request),
            request.url.path,
            len(errors),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": message}
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all handler for unhandled exceptions.

        - Logs the full traceback for debugging
        - Returns a generic error message to prevent info leakage
        - In debug mode, includes the exception type and text
        """
        logger.error(
            "Unhandled exception on %s %s id=%s:\n%s",
            request.method,
            request.url.path,
            _request_id(request),
            traceback.format_exc(),
        )

        content = {"error": "Internal Server Error"}
        if settings.DEBUG:
            content["error_type"] = type(exc).__name__
            content["detail"] = str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content
        )
