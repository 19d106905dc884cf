"""Multipart parsing for send-email submissions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from fastapi import Request
from python_multipart import MultipartParser
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import parse_options_header

from mailrelay.core.errors import AttachmentTooLargeError, DraftValidationError
from mailrelay.models import EmailAttachment
from mailrelay.models.email import DEFAULT_CONTENT_TYPE
from mailrelay.shared.fields import ATTACHMENTS_FIELD

MULTIPART_FORM_DATA = b"multipart/form-data"


@dataclass
class ParsedSubmission:
    fields: Dict[str, str] = field(default_factory=dict)
    attachments: List[EmailAttachment] = field(default_factory=list)


class _PartCollector:
    """Parser callbacks that fill a :class:`ParsedSubmission` while the body streams.

    File parts are counted as their bytes arrive, so a file over the ceiling
    aborts the parse before the rest of the body is read.
    """

    def __init__(self, max_file_size: int):
        self.max_file_size = max_file_size
        self.submission = ParsedSubmission()
        self._header_field = bytearray()
        self._header_value = bytearray()
        self._headers: Dict[bytes, bytes] = {}
        self._name = ""
        self._filename: Optional[str] = None
        self._content_type = ""
        self._data = bytearray()

    def callbacks(self) -> Dict[str, Callable]:
        return {
            "on_part_begin": self.on_part_begin,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_headers_finished": self.on_headers_finished,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
        }

    def on_part_begin(self) -> None:
        self._headers = {}
        self._name = ""
        self._filename = None
        self._content_type = ""
        self._data = bytearray()

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def on_header_end(self) -> None:
        self._headers[bytes(self._header_field).lower()] = bytes(self._header_value)
        self._header_field.clear()
        self._header_value.clear()

    def on_headers_finished(self) -> None:
        _, options = parse_options_header(self._headers.get(b"content-disposition", b""))
        if b"name" not in options:
            raise DraftValidationError("Form part is missing its field name")
        self._name = options[b"name"].decode("utf-8", errors="replace")

        if b"filename" in options:
            self._filename = options[b"filename"].decode("utf-8", errors="replace")
            if self._name != ATTACHMENTS_FIELD:
                raise DraftValidationError(f'Unexpected file field "{self._name}"')
            self._content_type = self._headers.get(b"content-type", b"").decode("latin-1")

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        if self._filename is not None and len(self._data) + (end - start) > self.max_file_size:
            raise AttachmentTooLargeError(self._filename or "attachment", self.max_file_size)
        self._data += data[start:end]

    def on_part_end(self) -> None:
        if self._filename is None:
            self.submission.fields[self._name] = self._data.decode("utf-8", errors="replace")
            return
        self.submission.attachments.append(
            EmailAttachment(
                filename=self._filename or "attachment",
                content_type=self._content_type or DEFAULT_CONTENT_TYPE,
                data=bytes(self._data),
            )
        )


async def _parse_urlencoded(request: Request) -> ParsedSubmission:
    # A form without files carries no attachments to bound.
    parsed = ParsedSubmission()
    async with request.form() as form:
        for key, value in form.multi_items():
            if not isinstance(value, str):
                raise DraftValidationError(f'Unexpected file field "{key}"')
            parsed.fields[key] = value
    return parsed


async def parse_submission(request: Request, *, max_file_size: int) -> ParsedSubmission:
    """Split the request body into text fields and in-memory attachments.

    Files sent under any field other than ``attachments`` are refused, and so
    is any file larger than ``max_file_size`` bytes. Nothing is spooled to
    disk: the body is fed chunk by chunk to the parser and reading stops at
    the first refused part.
    """

    content_type, params = parse_options_header(request.headers.get("content-type", ""))
    if content_type.lower() != MULTIPART_FORM_DATA:
        return await _parse_urlencoded(request)

    boundary = params.get(b"boundary")
    if not boundary:
        raise DraftValidationError("Missing boundary in multipart/form-data request")

    collector = _PartCollector(max_file_size)
    parser = MultipartParser(boundary, collector.callbacks())
    try:
        async for chunk in request.stream():
            parser.write(chunk)
        parser.finalize()
    except MultipartParseError as exc:
        raise DraftValidationError(f"Malformed multipart body: {exc}") from exc

    return collector.submission


__all__ = ["ParsedSubmission", "parse_submission"]
