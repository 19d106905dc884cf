"""Tests for the SMTP relay, using a stand-in for the smtplib connection."""

import smtplib

import pytest

from mailrelay.core.config import Settings
from mailrelay.core.errors import ErrorKind, RelayFailureError
from mailrelay.models import EmailAttachment, OutgoingEmail, SenderCredentials
from mailrelay.repository import SmtpMailRelay
from mailrelay.repository import mail_relay as mail_relay_module


class FakeSMTP:
    instances = []
    login_error = None
    send_error = None

    def __init__(self, host, port, timeout=None, context=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.logins = []
        self.sent = []
        self.started_tls = False
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def starttls(self, context=None):
        self.started_tls = True

    def login(self, user, password):
        if FakeSMTP.login_error is not None:
            raise FakeSMTP.login_error
        self.logins.append((user, password))

    def send_message(self, message, from_addr=None, to_addrs=None):
        if FakeSMTP.send_error is not None:
            raise FakeSMTP.send_error
        self.sent.append((message, from_addr, to_addrs))


@pytest.fixture(autouse=True)
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.login_error = None
    FakeSMTP.send_error = None
    monkeypatch.setattr(mail_relay_module.smtplib, "SMTP_SSL", FakeSMTP)
    monkeypatch.setattr(mail_relay_module.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


@pytest.fixture
def config():
    settings = Settings()
    settings.SMTP_HOST = "smtp.gmail.com"
    settings.SMTP_PORT = 465
    settings.SMTP_USE_SSL = True
    return settings


@pytest.fixture
def credentials():
    return SenderCredentials(email="sender@gmail.com", password="app-password")


@pytest.fixture
def email():
    return OutgoingEmail(
        sender="sender@gmail.com",
        to=("a@b.com", "c@d.com"),
        cc=("cc@b.com",),
        bcc=("hidden@b.com",),
        subject="Quarterly report",
        html_body="<p>See attached</p>",
        attachments=(
            EmailAttachment(filename="report.pdf", content_type="application/pdf", data=b"%PDF"),
            EmailAttachment(filename="blob", content_type="", data=b"\x00\x01"),
        ),
    )


class TestSmtpMailRelay:
    def test_authenticates_with_sender_credentials(self, config, email, credentials):
        SmtpMailRelay(config).send(email, credentials)

        connection = FakeSMTP.instances[0]
        assert (connection.host, connection.port) == ("smtp.gmail.com", 465)
        assert connection.logins == [("sender@gmail.com", "app-password")]

    def test_returns_message_id_of_sent_message(self, config, email, credentials):
        message_id = SmtpMailRelay(config).send(email, credentials)

        message, _, _ = FakeSMTP.instances[0].sent[0]
        assert message["Message-ID"] == message_id
        assert message_id.endswith("@gmail.com>")

    def test_bcc_only_on_envelope(self, config, email, credentials):
        SmtpMailRelay(config).send(email, credentials)

        message, from_addr, to_addrs = FakeSMTP.instances[0].sent[0]
        assert from_addr == "sender@gmail.com"
        assert to_addrs == ["a@b.com", "c@d.com", "cc@b.com", "hidden@b.com"]
        assert message["To"] == "a@b.com, c@d.com"
        assert message["Cc"] == "cc@b.com"
        assert message["Bcc"] is None

    def test_body_is_html_and_attachments_keep_type(self, config, email, credentials):
        SmtpMailRelay(config).send(email, credentials)

        message, _, _ = FakeSMTP.instances[0].sent[0]
        body = message.get_body(preferencelist=("html",))
        assert "<p>See attached</p>" in body.get_content()

        attachments = list(message.iter_attachments())
        assert [part.get_filename() for part in attachments] == ["report.pdf", "blob"]
        assert attachments[0].get_content_type() == "application/pdf"
        assert attachments[0].get_content() == b"%PDF"
        assert attachments[1].get_content_type() == "application/octet-stream"

    def test_starttls_when_ssl_disabled(self, config, email, credentials):
        config.SMTP_USE_SSL = False
        config.SMTP_USE_TLS = True
        config.SMTP_PORT = 587

        SmtpMailRelay(config).send(email, credentials)

        assert FakeSMTP.instances[0].started_tls is True

    def test_authentication_failure_is_reported(self, config, email, credentials):
        FakeSMTP.login_error = smtplib.SMTPAuthenticationError(
            535, b"5.7.8 Username and Password not accepted"
        )

        with pytest.raises(RelayFailureError) as excinfo:
            SmtpMailRelay(config).send(email, credentials)

        error = excinfo.value
        assert error.kind is ErrorKind.RELAY_FAILURE
        assert error.message == (
            "Failed to send email: Invalid login: 535 5.7.8 Username and Password not accepted"
        )
        assert isinstance(error.__cause__, smtplib.SMTPAuthenticationError)

    def test_refused_recipients_are_listed(self, config, email, credentials):
        FakeSMTP.send_error = smtplib.SMTPRecipientsRefused(
            {"a@b.com": (550, b"No such user")}
        )

        with pytest.raises(RelayFailureError) as excinfo:
            SmtpMailRelay(config).send(email, credentials)

        assert excinfo.value.detail == "Recipients refused: a@b.com (550 No such user)"

    def test_network_failure_is_reported(self, config, email, credentials, monkeypatch):
        def refuse(*args, **kwargs):
            raise ConnectionRefusedError(111, "Connection refused")

        monkeypatch.setattr(mail_relay_module.smtplib, "SMTP_SSL", refuse)

        with pytest.raises(RelayFailureError) as excinfo:
            SmtpMailRelay(config).send(email, credentials)

        assert "Connection refused" in excinfo.value.message

    def test_missing_host(self, config, email, credentials):
        config.SMTP_HOST = ""

        with pytest.raises(RelayFailureError):
            SmtpMailRelay(config).send(email, credentials)

        assert FakeSMTP.instances == []
