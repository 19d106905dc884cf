"""Log entries describing completed sends."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from mailrelay.models.email import EmailAttachment


@dataclass(frozen=True)
class AttachmentInfo:
    """Metadata of an attachment; the content itself is never retained."""

    filename: str
    size: int
    mimetype: str

    @classmethod
    def from_attachment(cls, attachment: EmailAttachment) -> "AttachmentInfo":
        return cls(
            filename=attachment.filename,
            size=attachment.size,
            mimetype=attachment.content_type,
        )


@dataclass(frozen=True)
class NewSendRecord:
    to: str
    subject: str
    message: str
    sender_email: str
    cc: Optional[str] = None
    bcc: Optional[str] = None
    attachment_info: Sequence[AttachmentInfo] = field(default_factory=tuple)


@dataclass(frozen=True)
class SendRecord:
    id: int
    sent_at: datetime
    to: str
    subject: str
    message: str
    sender_email: str
    cc: Optional[str] = None
    bcc: Optional[str] = None
    attachment_info: Sequence[AttachmentInfo] = field(default_factory=tuple)


__all__ = ["AttachmentInfo", "NewSendRecord", "SendRecord"]
