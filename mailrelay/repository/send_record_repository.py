"""In-memory log of completed sends."""

from __future__ import annotations

import threading
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from mailrelay.core.errors import PersistenceError
from mailrelay.models import NewSendRecord, SendRecord


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SendRecordRepository:
    """Append-only table of send records, living as long as the process.

    Identifiers start at 1 and are handed out under a lock, so two concurrent
    ``create`` calls never observe the same value and no identifier is reused.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow):
        self._records: Dict[int, SendRecord] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        self._clock = clock

    def create(self, new_record: NewSendRecord) -> SendRecord:
        if not new_record.sender_email:
            raise PersistenceError("Sender email is required")

        values = asdict(new_record)
        values["attachment_info"] = tuple(new_record.attachment_info)
        values["cc"] = new_record.cc or None
        values["bcc"] = new_record.bcc or None

        with self._lock:
            record_id = self._next_id
            self._next_id += 1
            record = SendRecord(id=record_id, sent_at=self._clock(), **values)
            self._records[record_id] = record
        return record

    def list(self) -> List[SendRecord]:
        with self._lock:
            return list(self._records.values())

    def get_by_id(self, record_id: int) -> Optional[SendRecord]:
        with self._lock:
            return self._records.get(record_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


__all__ = ["SendRecordRepository"]
