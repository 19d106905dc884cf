"""Pydantic schemas used by the mail relay service."""

from mailrelay.schemas.email import (
    AttachmentInfoResponse,
    SendEmailRequest,
    SendEmailResponse,
    SendEmailResult,
    SendRecordResponse,
    format_validation_error,
)

__all__ = [
    "AttachmentInfoResponse",
    "SendEmailRequest",
    "SendEmailResponse",
    "SendEmailResult",
    "SendRecordResponse",
    "format_validation_error",
]
