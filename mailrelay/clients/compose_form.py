"""Compose form state: draft, attachments, field errors and the last notification."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, Optional

import httpx

from mailrelay.clients.attachments import AttachmentCollector, SelectedFile
from mailrelay.clients.draft import EmailDraft, FormErrors, validate_draft
from mailrelay.clients.encoder import encode_submission
from mailrelay.clients.mailer_client import MailerApiError, MailerClient

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"


class SubmissionInProgressError(RuntimeError):
    """A send is already outstanding for this form."""


@dataclass(frozen=True)
class Notification:
    type: str
    message: str


class ComposeForm:
    """One compose form instance, sending through a :class:`MailerClient`.

    At most one send is in flight per form. This guard lives in the client
    only; the server does not deduplicate submissions.
    """

    def __init__(
        self,
        client: MailerClient,
        *,
        max_file_size: Optional[int] = None,
        require_sender: bool = True,
    ):
        self._client = client
        self.require_sender = require_sender
        self.draft = EmailDraft()
        self.errors = FormErrors()
        self.attachments = AttachmentCollector(max_file_size=max_file_size)
        self.notification: Optional[Notification] = None
        self._in_flight = threading.Lock()

    @property
    def is_pending(self) -> bool:
        return self._in_flight.locked()

    def update_field(self, name: str, value: str) -> None:
        if name not in {item.name for item in fields(EmailDraft)}:
            raise AttributeError(f"Unknown draft field: {name}")
        setattr(self.draft, name, value)
        if hasattr(self.errors, name):
            setattr(self.errors, name, "")

    def add_files(self, selection: Iterable[SelectedFile]) -> None:
        self.attachments.add_files(selection)
        self.errors.attachments = self.attachments.error

    def remove_file(self, index: int) -> None:
        self.attachments.remove_file(index)
        self.errors.attachments = self.attachments.error

    def validate(self) -> bool:
        self.errors = validate_draft(self.draft, require_sender=self.require_sender)
        return not self.errors.has_errors()

    def clear(self) -> None:
        self.draft.clear()
        self.errors.clear()
        self.attachments.clear()

    def dismiss_notification(self) -> None:
        self.notification = None

    def submit(self) -> Optional[Dict[str, Any]]:
        """Validate and send the draft; returns the API payload on success.

        Returns ``None`` when validation blocked the send or the send failed;
        ``notification`` then tells which.
        """
        if not self._in_flight.acquire(blocking=False):
            raise SubmissionInProgressError("An email is already being sent")

        try:
            if not self.validate():
                return None

            config = encode_submission(
                self.draft,
                self.attachments,
                include_sender=self.require_sender or self.draft.has_sender,
            )
            try:
                payload = self._client.send_email(config)
            except httpx.HTTPError as exc:
                detail = str(exc) or exc.__class__.__name__
                self._fail(detail)
                return None
            except MailerApiError as exc:
                self._fail(str(exc))
                return None

            self.notification = Notification(SUCCESS, "Email sent successfully!")
            self.clear()
            return payload
        finally:
            self._in_flight.release()

    def _fail(self, detail: str) -> None:
        logger.info("Send failed: %s", detail)
        self.notification = Notification(ERROR, f"Failed to send email: {detail}")


__all__ = [
    "ComposeForm",
    "ERROR",
    "Notification",
    "SUCCESS",
    "SubmissionInProgressError",
]
