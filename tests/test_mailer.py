import dataclasses
import smtplib

import pytest

from portfolio_api.entities import ContactRequest
from portfolio_api.services import mailer
from portfolio_api.services.mailer import ContactNotifier, build_contact_email


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls = []
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def send_message(self, msg):
        self.sent.append(msg)


class FailingSMTP(FakeSMTP):
    def send_message(self, msg):
        raise smtplib.SMTPServerDisconnected("gone")


@pytest.fixture()
def contact() -> ContactRequest:
    return ContactRequest(
        id=7,
        name="Ann <Admin>",
        email="ann@example.com",
        subject="New site",
        message="Line one\nLine two",
        budget_range="5k",
        timeline="",
        project_type="website",
        source="",
        status="new",
        created_at="2026-03-01T12:00:00.000Z",
    )


@pytest.fixture()
def smtp_settings(settings):
    return dataclasses.replace(settings, smtp_host="smtp.example.com", smtp_user="bot@example.com", smtp_pass="pw")


def test_unconfigured_notifier_skips(settings, contact, monkeypatch):
    monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)
    FakeSMTP.instances = []
    assert ContactNotifier(settings).notify_contact_request(contact) is False
    assert FakeSMTP.instances == []


def test_sends_with_starttls_and_reply_to(smtp_settings, contact, monkeypatch):
    monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)
    FakeSMTP.instances = []

    assert ContactNotifier(smtp_settings).notify_contact_request(contact) is True

    smtp = FakeSMTP.instances[0]
    assert (smtp.host, smtp.port) == ("smtp.example.com", 587)
    assert smtp.calls == ["starttls", ("login", "bot@example.com", "pw")]
    msg = smtp.sent[0]
    assert msg["Subject"] == "[Portfolio Contact] New site"
    assert msg["Reply-To"] == "ann@example.com"
    assert msg["To"] == smtp_settings.contact_email


def test_send_failure_returns_false(smtp_settings, contact, monkeypatch):
    monkeypatch.setattr(mailer.smtplib, "SMTP", FailingSMTP)
    assert ContactNotifier(smtp_settings).notify_contact_request(contact) is False


def test_email_body_lists_qualification_fields(contact):
    msg = build_contact_email(contact, sender="bot@example.com", recipient="me@example.com")
    text = msg.get_body(preferencelist=("plain",)).get_content()
    html = msg.get_body(preferencelist=("html",)).get_content()

    assert "Budget: 5k" in text
    assert "Timeline: not specified" in text
    assert "Source: not specified" in text
    assert "Ann &lt;Admin&gt;" in html
    assert "Line one<br>Line two" in html
