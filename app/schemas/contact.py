from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ContactRequest(BaseModel):
    """Raw JSON body of the contact form.

    Fields are optional here; presence is checked by the form validator so a
    missing field is reported as a 400 naming the field.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None


class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Message sent successfully"])


class ErrorResponse(BaseModel):
    error: str = Field(..., examples=["Missing required fields: email"])


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Bad Request"},
    500: {"model": ErrorResponse, "description": "Mail delivery failed"},
}
