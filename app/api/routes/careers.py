"""
Careers endpoint.

Accepts a job application with a resume attachment (PDF, DOC or DOCX) and
relays it by email. The stored resume is purged once the request finishes
unless RETAIN_UPLOADS is set.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from app.api.deps import get_mail_dispatcher, get_upload_handler
from app.core.config import settings
from app.core.errors import RelayError
from app.schemas.contact import ERROR_RESPONSES, ErrorResponse, MessageResponse
from app.schemas.submission import FileRef
from app.services.form_validator import validate_career
from app.services.mail_dispatcher import MailDispatcher, compose
from app.services.upload_service import UploadHandler

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/careers",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Submit a job application",
    responses={
        **ERROR_RESPONSES,
        413: {"model": ErrorResponse, "description": "Resume too large"},
    },
)
async def submit_application(
    request: Request,
    full_name: Optional[str] = Form(None, alias="fullName"),
    email: Optional[str] = Form(None),
    message: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    uploads: UploadHandler = Depends(get_upload_handler),
    dispatcher: MailDispatcher = Depends(get_mail_dispatcher),
) -> MessageResponse:
    """Validate the resume, store it, and relay the application by email."""
    request_id = getattr(request.state, "request_id", None)
    file_ref: Optional[FileRef] = None

    try:
        file_ref = await uploads.store(resume)
        submission = validate_career(full_name, email, message, file_ref)
        await dispatcher.dispatch(
            compose(submission, dispatcher.recipient),
            failure_message="Failed to send application",
        )
    except RelayError as exc:
        logger.warning(
            "Career application rejected id=%s status=%s error=%s",
            request_id,
            exc.status_code,
            exc.message,
            extra={"audit_event": "career_rejected", "request_id": request_id},
        )
        raise
    finally:
        if resume is not None:
            await resume.close()
        if not settings.RETAIN_UPLOADS:
            await uploads.discard(file_ref)

    logger.info(
        "AUDIT: Career application relayed id=%s resume_bytes=%s",
        request_id,
        file_ref.size_bytes,
        extra={"audit_event": "career_relayed", "request_id": request_id},
    )
    return MessageResponse(message="Application submitted successfully")
