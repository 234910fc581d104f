from __future__ import annotations

import asyncio
import html
import logging
import mimetypes
from dataclasses import dataclass, field
from email.message import EmailMessage
from pathlib import Path
from typing import List, Optional, Protocol

import anyio

from app.core.errors import DeliveryError
from app.schemas.submission import Submission, SubmissionKind

logger = logging.getLogger(__name__)

SUBJECTS = {
    SubmissionKind.CONTACT: "New Contact Form Submission",
    SubmissionKind.CAREER: "New Career Application",
}


class MailClient(Protocol):
    async def send(self, message: EmailMessage) -> None: ...


@dataclass
class MailAttachment:
    path: Path
    filename: str
    media_type: Optional[str] = None


@dataclass
class OutboundMail:
    """A message ready to hand to the mail transport."""
    recipient: str
    subject: str
    html: str
    sender: str
    attachments: List[MailAttachment] = field(default_factory=list)


def render_html(submission: Submission) -> str:
    return (
        f"<p><strong>Name:</strong> {html.escape(submission.name)}</p>\n"
        f"<p><strong>Email:</strong> {html.escape(submission.email)}</p>\n"
        f"<p><strong>Message:</strong> {html.escape(submission.message)}</p>"
    )


def compose(submission: Submission, recipient: str) -> OutboundMail:
    attachments = []
    if submission.attachment is not None:
        attachments.append(
            MailAttachment(
                path=submission.attachment.stored_path,
                filename=submission.attachment.original_name,
                media_type=submission.attachment.media_type,
            )
        )
    return OutboundMail(
        recipient=recipient,
        subject=SUBJECTS[submission.kind],
        html=render_html(submission),
        sender=submission.email,
        attachments=attachments,
    )


class MailDispatcher:
    """Sends outbound mail through the injected client, one attempt per call."""

    def __init__(
        self,
        client: MailClient,
        account: Optional[str],
        recipient: Optional[str],
        timeout: float = 30.0,
    ):
        self.client = client
        self.account = account
        self.recipient = recipient
        self.timeout = timeout

    async def build_message(self, mail: OutboundMail) -> EmailMessage:
        if not mail.recipient:
            raise RuntimeError("Mail recipient is not configured")

        msg = EmailMessage()
        msg["From"] = self.account or mail.sender
        msg["To"] = mail.recipient
        msg["Reply-To"] = mail.sender
        msg["Subject"] = mail.subject
        msg.set_content(mail.html, subtype="html")

        for attachment in mail.attachments:
            content = await anyio.Path(attachment.path).read_bytes()
            content_type = attachment.media_type
            if not content_type:
                content_type, _ = mimetypes.guess_type(attachment.filename)
            maintype, subtype = ("application", "octet-stream")
            if content_type and "/" in content_type:
                maintype, subtype = content_type.split("/", 1)
            msg.add_attachment(
                content,
                maintype=maintype,
                subtype=subtype,
                filename=attachment.filename,
            )

        return msg

    async def dispatch(
        self, mail: OutboundMail, failure_message: str = "Failed to send email"
    ) -> None:
        try:
            message = await self.build_message(mail)
            await asyncio.wait_for(self.client.send(message), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            logger.error(
                "Mail delivery timed out subject=%s timeout=%ss",
                mail.subject,
                self.timeout,
            )
            raise DeliveryError(failure_message, cause=exc) from exc
        except Exception as exc:
            logger.error(
                "Mail delivery failed subject=%s error=%s",
                mail.subject,
                exc,
            )
            raise DeliveryError(failure_message, cause=exc) from exc

        logger.info(
            "Mail delivered subject=%s attachments=%s",
            mail.subject,
            len(mail.attachments),
        )
