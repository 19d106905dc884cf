"""Shared fixtures for the mail relay tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from mailrelay.core.config import Settings
from mailrelay.main import create_app
from mailrelay.models import OutgoingEmail, SenderCredentials
from mailrelay.repository import SendRecordRepository

CEILING = 1024


@dataclass
class RecordingRelay:
    """Relay double that remembers every call instead of talking SMTP."""

    error: Optional[Exception] = None
    calls: List[Tuple[OutgoingEmail, SenderCredentials]] = field(default_factory=list)

    def send(self, email: OutgoingEmail, credentials: SenderCredentials) -> str:
        self.calls.append((email, credentials))
        if self.error is not None:
            raise self.error
        return f"<msg-{len(self.calls)}@relay.test>"


@pytest.fixture
def config() -> Settings:
    settings = Settings()
    settings.MAX_ATTACHMENT_SIZE = CEILING
    settings.API_PREFIX = "/api"
    return settings


@pytest.fixture
def relay() -> RecordingRelay:
    return RecordingRelay()


@pytest.fixture
def records() -> SendRecordRepository:
    return SendRecordRepository()


@pytest.fixture
def app(config, relay, records):
    return create_app(config=config, relay=relay, records=records)


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def form_fields() -> dict:
    return {
        "to": "a@b.com",
        "cc": "",
        "bcc": "",
        "subject": "s",
        "message": "m",
        "senderEmail": "sender@gmail.com",
        "senderPassword": "app-password",
    }
