"""Domain models for the mail relay service."""

from mailrelay.models.email import EmailAttachment, OutgoingEmail, SenderCredentials
from mailrelay.models.send_record import AttachmentInfo, NewSendRecord, SendRecord

__all__ = [
    "AttachmentInfo",
    "EmailAttachment",
    "NewSendRecord",
    "OutgoingEmail",
    "SendRecord",
    "SenderCredentials",
]
