"""Data access and delivery backends for the mail relay service."""

from mailrelay.repository.mail_relay import MailRelay, SmtpMailRelay
from mailrelay.repository.send_record_repository import SendRecordRepository

__all__ = ["MailRelay", "SendRecordRepository", "SmtpMailRelay"]
