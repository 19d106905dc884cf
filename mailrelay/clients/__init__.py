"""Compose-side client for the mail relay API."""

from mailrelay.clients.attachments import AttachmentCollector, SelectedFile
from mailrelay.clients.compose_form import (
    ComposeForm,
    Notification,
    SubmissionInProgressError,
)
from mailrelay.clients.draft import EmailDraft, FormErrors, validate_draft
from mailrelay.clients.encoder import encode_submission
from mailrelay.clients.mailer_client import MailerApiError, MailerClient
from mailrelay.clients.request_config import (
    CredentialsMode,
    JsonBody,
    MultipartBody,
    RequestConfig,
)

__all__ = [
    "AttachmentCollector",
    "ComposeForm",
    "CredentialsMode",
    "EmailDraft",
    "FormErrors",
    "JsonBody",
    "MailerApiError",
    "MailerClient",
    "MultipartBody",
    "Notification",
    "RequestConfig",
    "SelectedFile",
    "SubmissionInProgressError",
    "encode_submission",
    "validate_draft",
]
