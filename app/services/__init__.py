"""
FormRelay Services Module.

Services:
    - form_validator: required-field checks producing a Submission
    - UploadHandler: resume validation and storage in the holding directory
    - MailDispatcher: builds and sends outbound mail through the mail client
"""

from .form_validator import validate_career, validate_contact
from .mail_dispatcher import MailAttachment, MailDispatcher, OutboundMail, compose
from .upload_service import UploadHandler

__all__ = [
    "validate_contact",
    "validate_career",
    "UploadHandler",
    "MailDispatcher",
    "OutboundMail",
    "MailAttachment",
    "compose",
]
