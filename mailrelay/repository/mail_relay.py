"""Relay that authenticates against an SMTP provider and dispatches messages."""

from __future__ import annotations

import logging
import smtplib
import ssl
from contextlib import contextmanager
from email.message import EmailMessage
from email.utils import formatdate, make_msgid
from typing import Iterator, Protocol

from mailrelay.core.config import Settings, settings
from mailrelay.core.errors import RelayFailureError
from mailrelay.models import OutgoingEmail, SenderCredentials

logger = logging.getLogger(__name__)


class MailRelay(Protocol):
    def send(self, email: OutgoingEmail, credentials: SenderCredentials) -> str:
        """Deliver ``email`` as ``credentials.email`` and return its Message-ID."""
        ...


def _decode(value: bytes | str) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def describe_smtp_error(exc: BaseException) -> str:
    """Human readable description of an SMTP or network failure."""
    if isinstance(exc, smtplib.SMTPAuthenticationError):
        return f"Invalid login: {exc.smtp_code} {_decode(exc.smtp_error)}".strip()
    if isinstance(exc, smtplib.SMTPRecipientsRefused):
        refused = ", ".join(
            f"{address} ({code} {_decode(reason)})"
            for address, (code, reason) in exc.recipients.items()
        )
        return f"Recipients refused: {refused}"
    if isinstance(exc, smtplib.SMTPSenderRefused):
        return f"Sender address rejected: {exc.sender} ({exc.smtp_code} {_decode(exc.smtp_error)})"
    if isinstance(exc, smtplib.SMTPResponseException):
        return f"{exc.smtp_code} {_decode(exc.smtp_error)}".strip()
    return str(exc) or exc.__class__.__name__


class SmtpMailRelay:
    """Handles the low level communication with the SMTP server.

    A fresh connection is opened for every message and authenticated with the
    sender's own credentials (Gmail address + app password by default).
    """

    def __init__(self, config: Settings | None = None):
        self._settings = config or settings

    def _build_message(self, email: OutgoingEmail) -> tuple[EmailMessage, str]:
        message = EmailMessage()
        message_id = make_msgid(domain=email.sender.rsplit("@", 1)[-1])

        message["Subject"] = email.subject
        message["From"] = email.sender
        message["To"] = ", ".join(email.to)
        if email.cc:
            message["Cc"] = ", ".join(email.cc)
        # Bcc recipients only go on the envelope.
        message["Date"] = formatdate(localtime=True)
        message["Message-ID"] = message_id

        message.set_content(email.html_body, subtype="html")

        for attachment in email.attachments:
            maintype, subtype = attachment.mime_parts()
            message.add_attachment(
                attachment.data,
                maintype=maintype,
                subtype=subtype,
                filename=attachment.filename,
            )

        return message, message_id

    @contextmanager
    def _connect(self) -> Iterator[smtplib.SMTP]:
        host = self._settings.SMTP_HOST
        port = self._settings.SMTP_PORT
        timeout = self._settings.SMTP_TIMEOUT

        if self._settings.SMTP_USE_SSL:
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(host, port, timeout=timeout, context=context) as client:
                yield client
        else:
            with smtplib.SMTP(host, port, timeout=timeout) as client:
                if self._settings.SMTP_USE_TLS:
                    client.starttls(context=ssl.create_default_context())
                yield client

    def send(self, email: OutgoingEmail, credentials: SenderCredentials) -> str:
        if not self._settings.SMTP_HOST:
            raise RelayFailureError("SMTP_HOST must be configured to send emails")

        message, message_id = self._build_message(email)

        try:
            with self._connect() as client:
                client.login(credentials.email, credentials.password)
                client.send_message(
                    message,
                    from_addr=email.sender,
                    to_addrs=email.all_recipients(),
                )
        except (smtplib.SMTPException, OSError) as exc:
            detail = describe_smtp_error(exc)
            logger.warning(
                "SMTP delivery from %s via %s failed: %s",
                credentials.email,
                self._settings.SMTP_HOST,
                detail,
            )
            raise RelayFailureError(detail) from exc

        logger.info(
            "Email %s sent from %s to %d recipient(s)",
            message_id,
            email.sender,
            len(email.all_recipients()),
        )
        return message_id


__all__ = ["MailRelay", "SmtpMailRelay", "describe_smtp_error"]
