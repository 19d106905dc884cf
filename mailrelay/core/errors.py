"""Error kinds raised across the relay, store and request boundaries."""

from __future__ import annotations

from enum import Enum

from fastapi import status

from mailrelay.shared.formatting import format_file_size


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CREDENTIALS_MISSING = "credentials_missing"
    ATTACHMENT_TOO_LARGE = "attachment_too_large"
    RELAY_FAILURE = "relay_failure"
    PERSISTENCE = "persistence"
    NOT_FOUND = "not_found"


class MailRelayError(Exception):
    """Base class for every failure that is reported back to the caller.

    ``message`` is the text returned in the response body, unmodified.
    """

    kind: ErrorKind
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DraftValidationError(MailRelayError):
    """Submitted fields do not satisfy the send-email schema."""

    kind = ErrorKind.VALIDATION
    status_code = status.HTTP_400_BAD_REQUEST


class CredentialsMissingError(MailRelayError):
    kind = ErrorKind.CREDENTIALS_MISSING
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Sender email and password are required"):
        super().__init__(message)


class AttachmentTooLargeError(MailRelayError):
    kind = ErrorKind.ATTACHMENT_TOO_LARGE
    status_code = status.HTTP_413_CONTENT_TOO_LARGE

    def __init__(self, filename: str, limit: int):
        super().__init__(
            f"File '{filename}' exceeds the maximum allowed size ({format_file_size(limit)})"
        )
        self.filename = filename
        self.limit = limit


class RelayFailureError(MailRelayError):
    """The SMTP provider rejected the message or could not be reached."""

    kind = ErrorKind.RELAY_FAILURE
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(f"Failed to send email: {detail or 'Unknown error'}")
        self.detail = detail


class PersistenceError(MailRelayError):
    kind = ErrorKind.PERSISTENCE
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class RecordNotFoundError(MailRelayError):
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, record_id: int):
        super().__init__(f"Email with id {record_id} not found")
        self.record_id = record_id


__all__ = [
    "ErrorKind",
    "MailRelayError",
    "DraftValidationError",
    "CredentialsMissingError",
    "AttachmentTooLargeError",
    "RelayFailureError",
    "PersistenceError",
    "RecordNotFoundError",
]
