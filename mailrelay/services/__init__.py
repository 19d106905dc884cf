"""Service layer for the mail relay."""

from mailrelay.services.email_service import EmailService, SendOutcome

__all__ = ["EmailService", "SendOutcome"]
