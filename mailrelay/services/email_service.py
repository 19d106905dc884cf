"""High level orchestration of a send-email submission."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Sequence

from pydantic import ValidationError

from mailrelay.core.errors import (
    CredentialsMissingError,
    DraftValidationError,
    RecordNotFoundError,
    RelayFailureError,
)
from mailrelay.models import (
    AttachmentInfo,
    EmailAttachment,
    NewSendRecord,
    OutgoingEmail,
    SendRecord,
    SenderCredentials,
)
from mailrelay.repository import MailRelay, SendRecordRepository, SmtpMailRelay
from mailrelay.schemas import SendEmailRequest, format_validation_error
from mailrelay.shared.fields import SENDER_EMAIL_FIELD, SENDER_PASSWORD_FIELD
from mailrelay.shared.validators import split_address_list

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendOutcome:
    message_id: str
    record: SendRecord


class EmailService:
    """Validate a submission, relay it and keep a record of the send.

    A submission only reaches the relay once credentials are present and every
    field passed validation; a record is only written once the relay accepted
    the message.
    """

    def __init__(
        self,
        *,
        relay: MailRelay | None = None,
        records: SendRecordRepository | None = None,
    ):
        self._relay = relay or SmtpMailRelay()
        self._records = records if records is not None else SendRecordRepository()

    @staticmethod
    def _validate(fields: Mapping[str, str]) -> SendEmailRequest:
        if not fields.get(SENDER_EMAIL_FIELD) or not fields.get(SENDER_PASSWORD_FIELD):
            raise CredentialsMissingError()

        try:
            return SendEmailRequest.model_validate(
                {
                    "to": fields.get("to", ""),
                    "cc": fields.get("cc") or "",
                    "bcc": fields.get("bcc") or "",
                    "subject": fields.get("subject", ""),
                    "message": fields.get("message", ""),
                    "senderEmail": fields[SENDER_EMAIL_FIELD],
                    "senderPassword": fields[SENDER_PASSWORD_FIELD],
                }
            )
        except ValidationError as exc:
            raise DraftValidationError(format_validation_error(exc)) from exc

    def _relay_email(
        self,
        request: SendEmailRequest,
        attachments: Sequence[EmailAttachment],
    ) -> str:
        email = OutgoingEmail(
            sender=request.sender_email,
            to=tuple(split_address_list(request.to)),
            cc=tuple(split_address_list(request.cc)),
            bcc=tuple(split_address_list(request.bcc)),
            subject=request.subject,
            html_body=request.message,
            attachments=tuple(attachments),
        )
        credentials = SenderCredentials(
            email=request.sender_email,
            password=request.sender_password,
        )

        try:
            return self._relay.send(email, credentials)
        except RelayFailureError:
            raise
        except Exception as exc:
            raise RelayFailureError(str(exc)) from exc

    def send_email(
        self,
        fields: Mapping[str, str],
        attachments: Sequence[EmailAttachment] = (),
    ) -> SendOutcome:
        """Run a parsed submission through validation, relay and persistence."""

        request = self._validate(fields)
        message_id = self._relay_email(request, attachments)

        record = self._records.create(
            NewSendRecord(
                to=request.to,
                cc=request.cc,
                bcc=request.bcc,
                subject=request.subject,
                message=request.message,
                sender_email=request.sender_email,
                attachment_info=tuple(
                    AttachmentInfo.from_attachment(attachment) for attachment in attachments
                ),
            )
        )
        logger.info(
            "Email sent to: %s (record %s, %d attachment(s))",
            request.to,
            record.id,
            len(attachments),
        )
        return SendOutcome(message_id=message_id, record=record)

    def list_sent(self) -> List[SendRecord]:
        return self._records.list()

    def get_sent(self, record_id: int) -> SendRecord:
        record = self._records.get_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        return record


__all__ = ["EmailService", "SendOutcome"]
