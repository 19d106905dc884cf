"""Schemas for the send-email endpoint and the send history."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from mailrelay.models import SendRecord
from mailrelay.shared.validators import validate_email, validate_email_list


class SendEmailRequest(BaseModel):
    """Text fields of a multipart send-email submission."""

    model_config = ConfigDict(populate_by_name=True)

    to: str = Field(default="", validate_default=True)
    cc: str = ""
    bcc: str = ""
    subject: str = Field(default="", validate_default=True)
    message: str = Field(default="", validate_default=True)
    sender_email: str = Field(default="", alias="senderEmail", validate_default=True)
    sender_password: str = Field(
        default="", alias="senderPassword", validate_default=True, repr=False
    )

    @field_validator("to")
    @classmethod
    def _validate_recipients(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("recipients_required", "Recipients are required")
        if not validate_email_list(value):
            raise PydanticCustomError(
                "recipients_invalid",
                "Recipients must be valid email addresses separated by commas",
            )
        return value

    @field_validator("cc", "bcc")
    @classmethod
    def _validate_copies(cls, value: Optional[str], info: ValidationInfo) -> str:
        value = value or ""
        if value.strip() and not validate_email_list(value):
            raise PydanticCustomError(
                "copy_recipients_invalid",
                "{field} recipients must be valid email addresses separated by commas",
                {"field": info.field_name.capitalize()},
            )
        return value

    @field_validator("subject")
    @classmethod
    def _validate_subject(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("subject_required", "Subject is required")
        if "\r" in value or "\n" in value:
            raise PydanticCustomError(
                "subject_single_line", "Subject must not contain line breaks"
            )
        return value

    @field_validator("message")
    @classmethod
    def _validate_message(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("message_required", "Message is required")
        return value

    @field_validator("sender_email")
    @classmethod
    def _validate_sender_email(cls, value: str) -> str:
        value = value.strip()
        if not validate_email(value):
            raise PydanticCustomError("sender_email_invalid", "Valid sender email is required")
        return value

    @field_validator("sender_password")
    @classmethod
    def _validate_sender_password(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("sender_password_required", "Sender password is required")
        return value


def format_validation_error(exc: ValidationError) -> str:
    """Fold every field error into one readable sentence.

    ``Validation error: Subject is required at "subject"; ...``
    """
    parts = []
    for error in exc.errors():
        location = ".".join(str(loc) for loc in error.get("loc", ()))
        message = error.get("msg", "Invalid input")
        parts.append(f'{message} at "{location}"' if location else message)
    return "Validation error: " + "; ".join(parts)


class SendEmailResult(BaseModel):
    message_id: str = Field(alias="messageId")

    model_config = ConfigDict(populate_by_name=True)


class SendEmailResponse(BaseModel):
    message: str
    result: SendEmailResult


class AttachmentInfoResponse(BaseModel):
    filename: str
    size: int
    mimetype: str

    model_config = ConfigDict(from_attributes=True)


class SendRecordResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    to: str
    cc: Optional[str] = None
    bcc: Optional[str] = None
    subject: str
    message: str
    attachment_info: List[AttachmentInfoResponse] = Field(default_factory=list)
    sent_at: datetime
    sender_email: str

    @classmethod
    def from_record(cls, record: SendRecord) -> "SendRecordResponse":
        return cls(
            id=record.id,
            to=record.to,
            cc=record.cc,
            bcc=record.bcc,
            subject=record.subject,
            message=record.message,
            attachment_info=[
                AttachmentInfoResponse.model_validate(info) for info in record.attachment_info
            ],
            sent_at=record.sent_at,
            sender_email=record.sender_email,
        )


__all__ = [
    "AttachmentInfoResponse",
    "SendEmailRequest",
    "SendEmailResponse",
    "SendEmailResult",
    "SendRecordResponse",
    "format_validation_error",
]
