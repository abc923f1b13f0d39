import os
from pathlib import Path

import pytest

# Configure a dedicated SQLite DB for tests before importing the Flask app.
TEST_DB_PATH = Path(__file__).resolve().parent / "pytest_starpublicity.db"
os.environ["FLASK_ENV"] = "development"
os.environ["SECRET_KEY"] = "test_secret_key"
os.environ["JWT_SECRET"] = "test_jwt_secret"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH.as_posix()}"
os.environ["SCHEDULER_DISABLED"] = "1"
os.environ["RATELIMIT_ENABLED"] = "0"
os.environ["ADMIN_EMAIL"] = "inbox@starpublicity.test"
os.environ["INQUIRY_RECEIVER_PHONE"] = "9000000001"
os.environ["MESSAGING_READY_TIMEOUT"] = "0.05"
os.environ["MESSAGING_POLL_INTERVAL"] = "0.01"
for _key in ("SMTP_USER", "SMTP_PASS", "WHATSAPP_GATEWAY_URL"):
    os.environ.pop(_key, None)

from app import app as _flask_app, db
from models import Inquiry, User
from services.auth_service import hash_password, issue_token
from services.messaging_service import MessagingSender

ADMIN_PASSWORD = "admin-pass-1234"

VALID_INQUIRY = {
    "firstName": "A",
    "lastName": "B",
    "email": "a@b.com",
    "phone": "9876543210",
    "city": "X",
    "advertisingState": "Y",
    "advertisingMarket": "Z",
    "topic": "Sales",
    "media": "Billboards",
    "message": "Hi",
}


class FakeSender(MessagingSender):
    """메신저 세션 대역 - 보낸 메시지를 기록한다."""

    def __init__(self, ready=True, fail=False):
        self.ready = ready
        self.fail = fail
        self.sent = []
        self.ready_timeout = 0.05
        self.poll_interval = 0.01

    def is_ready(self):
        return self.ready

    def _deliver(self, identity, text):
        if self.fail:
            from services.errors import DispatchError
            raise DispatchError("gateway down")
        self.sent.append((identity, text))
        return {"success": True, "detail": "fake"}


@pytest.fixture
def flask_app():
    _flask_app.config["TESTING"] = True

    with _flask_app.app_context():
        db.session.remove()
        db.drop_all()
        db.create_all()
        yield _flask_app
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(flask_app):
    with flask_app.test_client() as client:
        yield client


@pytest.fixture
def fake_sender(monkeypatch):
    sender = FakeSender()
    import services.notification_service as notification_module
    monkeypatch.setattr(notification_module, "get_sender", lambda config: sender)
    return sender


@pytest.fixture
def sent_emails(monkeypatch):
    """send_email 호출 기록 (notification / inquiry / campaign 모듈 공통)."""
    sent = []

    def _fake_send_email(to, subject, body, reply_to=None):
        sent.append({"to": to, "subject": subject, "body": body, "reply_to": reply_to})
        return {"success": True, "detail": "fake"}

    import routes.campaign as campaign_module
    import services.inquiry_service as inquiry_module
    import services.notification_service as notification_module
    for module in (notification_module, inquiry_module, campaign_module):
        monkeypatch.setattr(module, "send_email", _fake_send_email)
    return sent


def make_user(email="admin@starpublicity.test", role="admin", is_active=True):
    user = User(email=email, password_hash=hash_password(ADMIN_PASSWORD), role=role, is_active=is_active)
    db.session.add(user)
    db.session.commit()
    return user


def auth_header(user):
    return {"Authorization": f"Bearer {issue_token(user)}"}


@pytest.fixture
def admin_headers(flask_app):
    return auth_header(make_user())


@pytest.fixture
def super_admin(flask_app):
    return make_user(email="root@starpublicity.test", role="superAdmin")


@pytest.fixture
def super_headers(super_admin):
    return auth_header(super_admin)


def make_inquiry(**overrides):
    fields = {
        "first_name": "Asha", "last_name": "Rao", "email": "asha@example.com",
        "phone": "9876543210", "city": "Indore", "advertising_state": "MP",
        "advertising_market": "Indore", "topic": "Sales", "media": "Billboards",
        "message": "Need hoardings",
    }
    fields.update(overrides)
    inquiry = Inquiry(**fields)
    db.session.add(inquiry)
    db.session.commit()
    return inquiry
