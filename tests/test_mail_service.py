"""SMTP 메일 발송 서비스 테스트"""
import smtplib

import pytest

from services.errors import DispatchError
from services.mail_service import send_email


class _FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.messages = []
        _FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def login(self, user, password):
        pass

    def send_message(self, msg):
        self.messages.append(msg)


@pytest.fixture
def smtp_configured(flask_app, monkeypatch):
    _FakeSMTP.instances = []
    monkeypatch.setitem(flask_app.config, "SMTP_USER", "mailer@starpublicity.in")
    monkeypatch.setitem(flask_app.config, "SMTP_PASS", "app-password")
    monkeypatch.setitem(flask_app.config, "SMTP_TIMEOUT", 7.5)
    monkeypatch.setattr(smtplib, "SMTP_SSL", _FakeSMTP)
    return flask_app


def test_mock_mode_without_credentials(flask_app):
    assert send_email("a@b.com", "Hi", "Body") == {"success": True, "detail": "mock"}


def test_smtp_connection_has_timeout(smtp_configured):
    result = send_email("a@b.com", "Hi", "Body", reply_to="c@d.com")

    assert result["detail"] == "sent"
    server = _FakeSMTP.instances[0]
    assert server.timeout == 7.5
    assert server.messages[0]["Reply-To"] == "c@d.com"


def test_smtp_timeout_raises_dispatch_error(smtp_configured, monkeypatch):
    def _hung(*args, **kwargs):
        raise TimeoutError("timed out")

    monkeypatch.setattr(smtplib, "SMTP_SSL", _hung)
    with pytest.raises(DispatchError):
        send_email("a@b.com", "Hi", "Body")


def test_missing_recipient(flask_app):
    with pytest.raises(DispatchError):
        send_email("", "Hi", "Body")
