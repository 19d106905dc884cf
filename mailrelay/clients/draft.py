"""The in-progress email held by the compose client."""

from __future__ import annotations

from dataclasses import dataclass, fields

from mailrelay.shared.validators import validate_email, validate_email_list


@dataclass
class EmailDraft:
    to: str = ""
    cc: str = ""
    bcc: str = ""
    subject: str = ""
    message: str = ""
    sender_email: str = ""
    sender_password: str = ""

    def clear(self) -> None:
        for item in fields(self):
            setattr(self, item.name, "")

    @property
    def has_sender(self) -> bool:
        return bool(self.sender_email and self.sender_password)


@dataclass
class FormErrors:
    """Inline error text per field; an empty string means no error."""

    to: str = ""
    subject: str = ""
    message: str = ""
    attachments: str = ""
    sender_email: str = ""
    sender_password: str = ""

    def clear(self) -> None:
        for item in fields(self):
            setattr(self, item.name, "")

    def has_errors(self) -> bool:
        return any(getattr(self, item.name) for item in fields(self))


def validate_draft(draft: EmailDraft, *, require_sender: bool = True) -> FormErrors:
    errors = FormErrors()

    if not validate_email_list(draft.to):
        errors.to = "Please enter at least one valid email address"
    if not draft.subject.strip():
        errors.subject = "Please enter a subject"
    if not draft.message.strip():
        errors.message = "Please enter a message"

    if require_sender:
        if not validate_email(draft.sender_email.strip()):
            errors.sender_email = "Please enter a valid sender email address"
        if not draft.sender_password:
            errors.sender_password = "Please enter the sender app password"

    return errors


__all__ = ["EmailDraft", "FormErrors", "validate_draft"]
