"""Unit tests for the SendGrid email helper utilities."""

from __future__ import annotations

import json
import types

import pytest

from portal.infrastructure import email as email_module


class DummySettings:
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "sender@example.com"


class RecordingClient:
    """Stand-in for ``SendGridAPIClient`` that keeps the sent messages."""

    sent: list = []

    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, message):
        RecordingClient.sent.append(message)
        return types.SimpleNamespace(status_code=202, body=None)


@pytest.fixture()
def configured(monkeypatch: pytest.MonkeyPatch) -> type[RecordingClient]:
    RecordingClient.sent = []
    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RecordingClient)
    return RecordingClient


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the helper should exit early."""

    class EmptySettings:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: EmptySettings())

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False


def test_send_email_success(configured) -> None:
    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is True
    assert len(configured.sent) == 1


def test_send_email_unsuccessful_status(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    class RejectingClient(RecordingClient):
        def send(self, message):
            return types.SimpleNamespace(
                status_code=400,
                body=json.dumps({"errors": [{"message": "Invalid recipient"}]}),
            )

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    with caplog.at_level("ERROR"):
        assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False

    assert "status 400" in caplog.text
    assert "Invalid recipient" in caplog.text


def test_send_email_logs_forbidden_error(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    """Forbidden responses from SendGrid should surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {
                "errors": [
                    {
                        "message": "The provided authorization grant is invalid.",
                        "help": "https://sendgrid.com/docs/for-developers/sending-email/api-getting-started/",
                    }
                ]
            }
        ).encode()

    class FailingClient(RecordingClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert result is False
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_project_created_email_escapes_content(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, str] = {}

    def _fake_send(subject: str, html_content: str, recipient: str) -> bool:
        captured.update(subject=subject, html=html_content, recipient=recipient)
        return True

    monkeypatch.setattr(email_module, "send_email", _fake_send)

    assert email_module.send_project_created_email(
        "jane@example.com", "Jane <Doe>", "Acme & Co", None, "2024-06-01"
    )

    assert captured["recipient"] == "jane@example.com"
    assert "Acme & Co" in captured["subject"]
    assert "Jane &lt;Doe&gt;" in captured["html"]
    assert "Acme &amp; Co" in captured["html"]
    assert "2024-06-01" in captured["html"]


def test_invoice_email_formats_amount(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, str] = {}

    def _fake_send(subject: str, html_content: str, recipient: str) -> bool:
        captured["html"] = html_content
        return True

    monkeypatch.setattr(email_module, "send_email", _fake_send)

    email_module.send_invoice_created_email(
        "jane@example.com", "Jane", "Shop", 123456, "http://portal/invoices"
    )

    assert "$1,234.56" in captured["html"]
    assert 'href="http://portal/invoices"' in captured["html"]
