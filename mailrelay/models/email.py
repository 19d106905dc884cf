"""Email related domain models."""

from dataclasses import dataclass, field
from typing import Sequence

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class EmailAttachment:
    """Binary attachment to be delivered with an email."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    def mime_parts(self) -> tuple[str, str]:
        """Return ``(maintype, subtype)``, defaulting to octet-stream."""
        content_type = (self.content_type or "").split(";", 1)[0].strip()
        if "/" not in content_type:
            content_type = DEFAULT_CONTENT_TYPE
        maintype, subtype = content_type.split("/", 1)
        return maintype, subtype


@dataclass(frozen=True)
class SenderCredentials:
    """Mailbox address plus provider app password used to authenticate."""

    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class OutgoingEmail:
    """Represents an email ready to be delivered."""

    sender: str
    to: Sequence[str]
    subject: str
    html_body: str
    cc: Sequence[str] = field(default_factory=tuple)
    bcc: Sequence[str] = field(default_factory=tuple)
    attachments: Sequence[EmailAttachment] = field(default_factory=tuple)

    def all_recipients(self) -> list[str]:
        """Envelope recipients: To, then Cc, then Bcc."""
        return [*self.to, *self.cc, *self.bcc]


__all__ = ["EmailAttachment", "OutgoingEmail", "SenderCredentials", "DEFAULT_CONTENT_TYPE"]
