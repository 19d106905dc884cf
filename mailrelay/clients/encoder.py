"""Serialization of a draft and its files into one multipart request."""

from __future__ import annotations

from typing import Iterable, List

from mailrelay.clients.attachments import SelectedFile
from mailrelay.clients.draft import EmailDraft
from mailrelay.clients.request_config import (
    CredentialsMode,
    MultipartBody,
    MultipartPart,
    RequestConfig,
)
from mailrelay.shared.fields import (
    ATTACHMENTS_FIELD,
    SENDER_EMAIL_FIELD,
    SENDER_PASSWORD_FIELD,
)

TEXT_FIELDS = ("to", "cc", "bcc", "subject", "message")


def _text_part(name: str, value: str) -> MultipartPart:
    # No filename: the server reads the part as a plain form field.
    return (name, (None, value.encode("utf-8"), None))


def encode_submission(
    draft: EmailDraft,
    attachments: Iterable[SelectedFile],
    *,
    include_sender: bool = True,
) -> RequestConfig:
    """Build the POST for ``/send-email``.

    Text fields always come first (``cc``/``bcc`` possibly empty), then the
    sender credentials when ``include_sender`` is set, then every file under
    the shared ``attachments`` name in selection order. Headers are left empty
    so the transport writes the multipart boundary itself.
    """

    parts: List[MultipartPart] = [_text_part(name, getattr(draft, name)) for name in TEXT_FIELDS]

    if include_sender:
        parts.append(_text_part(SENDER_EMAIL_FIELD, draft.sender_email))
        parts.append(_text_part(SENDER_PASSWORD_FIELD, draft.sender_password))

    for selected in attachments:
        parts.append(
            (ATTACHMENTS_FIELD, (selected.name, selected.data, selected.content_type))
        )

    return RequestConfig(
        method="POST",
        headers={},
        body=MultipartBody(parts=parts),
        credentials_mode=CredentialsMode.INCLUDE,
    )


__all__ = ["TEXT_FIELDS", "encode_submission"]
