"""Tests for the in-memory send-record store."""

import threading
from datetime import datetime, timezone

import pytest

from mailrelay.core.errors import ErrorKind, PersistenceError
from mailrelay.models import AttachmentInfo, NewSendRecord
from mailrelay.repository import SendRecordRepository


def _new_record(**overrides) -> NewSendRecord:
    values = {
        "to": "a@b.com",
        "subject": "Hello",
        "message": "<p>Hi</p>",
        "sender_email": "sender@gmail.com",
    }
    values.update(overrides)
    return NewSendRecord(**values)


class TestSendRecordRepository:
    @pytest.fixture
    def fixed_time(self):
        return datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    @pytest.fixture
    def repo(self, fixed_time):
        return SendRecordRepository(clock=lambda: fixed_time)

    def test_identifiers_start_at_one_and_increase(self, repo):
        first = repo.create(_new_record())
        second = repo.create(_new_record(subject="Again"))

        assert first.id == 1
        assert second.id == 2

    def test_sent_at_comes_from_clock(self, repo, fixed_time):
        record = repo.create(_new_record())
        assert record.sent_at == fixed_time

    def test_list_returns_creation_order(self, repo):
        for index in range(3):
            repo.create(_new_record(subject=f"#{index}"))

        assert [record.subject for record in repo.list()] == ["#0", "#1", "#2"]

    def test_get_by_id(self, repo):
        created = repo.create(_new_record())

        assert repo.get_by_id(created.id) == created
        assert repo.get_by_id(42) is None

    def test_empty_copies_are_stored_as_none(self, repo):
        record = repo.create(_new_record(cc="", bcc=""))
        assert record.cc is None
        assert record.bcc is None

    def test_attachment_metadata_is_kept(self, repo):
        info = AttachmentInfo(filename="a.pdf", size=10, mimetype="application/pdf")
        record = repo.create(_new_record(attachment_info=[info]))

        assert record.attachment_info == (info,)

    def test_missing_sender_is_rejected(self, repo):
        with pytest.raises(PersistenceError) as excinfo:
            repo.create(_new_record(sender_email=""))

        assert excinfo.value.kind is ErrorKind.PERSISTENCE
        assert len(repo) == 0

    def test_rejected_create_does_not_consume_identifier(self, repo):
        with pytest.raises(PersistenceError):
            repo.create(_new_record(sender_email=""))

        assert repo.create(_new_record()).id == 1

    def test_concurrent_creates_get_unique_identifiers(self):
        repo = SendRecordRepository()
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            for _ in range(25):
                repo.create(_new_record())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        ids = [record.id for record in repo.list()]
        assert sorted(ids) == list(range(1, 201))
