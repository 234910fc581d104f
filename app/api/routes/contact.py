"""
Contact form endpoint.

Validates the JSON body and relays it to the configured inbox.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status

from app.api.deps import get_mail_dispatcher
from app.core.errors import RelayError
from app.schemas.contact import ERROR_RESPONSES, ContactRequest, MessageResponse
from app.services.form_validator import validate_contact
from app.services.mail_dispatcher import MailDispatcher, compose

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/contact",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Send a contact message",
    responses=ERROR_RESPONSES,
)
async def submit_contact(
    payload: ContactRequest,
    request: Request,
    dispatcher: MailDispatcher = Depends(get_mail_dispatcher),
) -> MessageResponse:
    """Relay a contact form submission by email."""
    request_id = getattr(request.state, "request_id", None)

    try:
        submission = validate_contact(payload.name, payload.email, payload.message)
        await dispatcher.dispatch(
            compose(submission, dispatcher.recipient),
            failure_message="Failed to send email",
        )
    except RelayError as exc:
        logger.warning(
            "Contact request rejected id=%s status=%s error=%s",
            request_id,
            exc.status_code,
            exc.message,
            extra={"audit_event": "contact_rejected", "request_id": request_id},
        )
        raise

    logger.info(
        "AUDIT: Contact message relayed id=%s",
        request_id,
        extra={"audit_event": "contact_relayed", "request_id": request_id},
    )
    return MessageResponse(message="Message sent successfully")
