"""관리자 로그인 및 시도 제한 테스트"""
import json
from datetime import datetime, timedelta

from conftest import ADMIN_PASSWORD, auth_header, make_user
from models import LoginAttempt, db


def _post_login(client, email, password):
    return client.post(
        "/login",
        data=json.dumps({"email": email, "password": password}),
        content_type="application/json",
    )


def test_login_success(client, flask_app):
    """올바른 비밀번호 → 토큰 발급, /me 로 본인 확인"""
    make_user()
    resp = _post_login(client, "Admin@StarPublicity.test", ADMIN_PASSWORD)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["role"] == "admin"
    assert body["email"] == "admin@starpublicity.test"

    me = client.get("/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.get_json()["email"] == "admin@starpublicity.test"


def test_login_failure_records_attempt(client, flask_app):
    """틀린 비밀번호 → 401 + 시도 기록"""
    make_user()
    before = LoginAttempt.query.count()

    resp = _post_login(client, "admin@starpublicity.test", "wrong_password")
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid credentials"
    assert LoginAttempt.query.count() == before + 1


def test_login_unknown_user(client, flask_app):
    resp = _post_login(client, "ghost@starpublicity.test", ADMIN_PASSWORD)
    assert resp.status_code == 401


def test_login_missing_fields(client, flask_app):
    resp = client.post("/login", data=json.dumps({"email": "a@b.com"}), content_type="application/json")
    assert resp.status_code == 400


def test_login_blocked_after_max_attempts(client, flask_app):
    """5회 실패 후에는 올바른 비밀번호여도 429"""
    make_user()
    for _ in range(5):
        _post_login(client, "admin@starpublicity.test", "wrong_password")

    resp = _post_login(client, "admin@starpublicity.test", ADMIN_PASSWORD)
    assert resp.status_code == 429
    assert "token" not in resp.get_json()


def test_success_clears_attempts(client, flask_app):
    make_user()
    for _ in range(3):
        _post_login(client, "admin@starpublicity.test", "wrong_password")

    assert _post_login(client, "admin@starpublicity.test", ADMIN_PASSWORD).status_code == 200
    assert LoginAttempt.query.count() == 0


def test_purge_expired_attempts(client, flask_app):
    """만료된 시도 레코드는 다음 로그인 요청 시 정리되어야 함"""
    old = LoginAttempt(ip="1.2.3.4")
    old.created_at = datetime.now() - timedelta(minutes=10)
    db.session.add(old)
    db.session.commit()
    assert LoginAttempt.query.count() == 1

    _post_login(client, "admin@starpublicity.test", "wrong_password")

    remaining = LoginAttempt.query.all()
    assert len(remaining) == 1
    assert remaining[0].ip != "1.2.3.4"


def test_suspended_account_cannot_login(client, flask_app):
    make_user(is_active=False)
    resp = _post_login(client, "admin@starpublicity.test", ADMIN_PASSWORD)
    assert resp.status_code == 401


def test_suspended_account_token_rejected(client, flask_app):
    """정지 전에 발급된 토큰도 403"""
    user = make_user()
    headers = auth_header(user)
    user.is_active = False
    db.session.commit()

    resp = client.get("/me", headers=headers)
    assert resp.status_code == 403


def test_invalid_token_rejected(client, flask_app):
    resp = client.get("/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid token"


def test_expired_token_rejected(client, flask_app, monkeypatch):
    user = make_user()
    monkeypatch.setitem(flask_app.config, "JWT_EXPIRES_SECONDS", -10)
    headers = auth_header(user)

    resp = client.get("/me", headers=headers)
    assert resp.status_code == 401
