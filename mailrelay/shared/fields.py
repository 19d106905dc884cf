"""Form field names of the send-email submission."""

ATTACHMENTS_FIELD = "attachments"
SENDER_EMAIL_FIELD = "senderEmail"
SENDER_PASSWORD_FIELD = "senderPassword"

__all__ = ["ATTACHMENTS_FIELD", "SENDER_EMAIL_FIELD", "SENDER_PASSWORD_FIELD"]
