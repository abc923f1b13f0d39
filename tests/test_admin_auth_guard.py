"""관리자 전용 엔드포인트 인증 가드 회귀 테스트

토큰 없이 접근하면 401, 일반 admin 이 superAdmin 전용 API 에 접근하면 403.
퍼블릭 접수 API 는 토큰 없이 접근 가능해야 한다.
"""
import pytest


# (method, url) 형태로 보호되어야 할 엔드포인트 목록
PROTECTED = [
    ("GET",   "/me"),
    ("GET",   "/contact/inquiries"),
    ("GET",   "/contact/inquiries/export"),
    ("GET",   "/contact/inquiries/some-id"),
    ("PATCH", "/contact/inquiries/some-id/status"),
    ("POST",  "/contact/inquiries/some-id/notes"),
    ("POST",  "/contact/inquiries/some-id/forward"),
    ("GET",   "/admin/notifications"),
    ("GET",   "/admin/stats"),
    ("GET",   "/admin/users"),
    ("POST",  "/admin/users"),
    ("PATCH", "/admin/users/1"),
    ("DELETE", "/admin/users/1"),
]

SUPER_ADMIN_ONLY = [
    ("GET",   "/admin/users"),
    ("POST",  "/admin/users"),
    ("PATCH", "/admin/users/1"),
    ("DELETE", "/admin/users/1"),
]


@pytest.mark.parametrize("method,url", PROTECTED)
def test_unauthenticated_is_rejected(client, flask_app, method, url):
    """토큰 없이 보호된 엔드포인트 접근 시 401"""
    resp = client.open(url, method=method, json={})
    assert resp.status_code == 401, f"{method} {url} returned {resp.status_code}"
    assert resp.get_json()["message"] == "No token provided"


@pytest.mark.parametrize("method,url", PROTECTED)
def test_malformed_authorization_header(client, flask_app, method, url):
    resp = client.open(url, method=method, json={}, headers={"Authorization": "Basic abc"})
    assert resp.status_code == 401


@pytest.mark.parametrize("method,url", SUPER_ADMIN_ONLY)
def test_plain_admin_forbidden_from_user_management(client, flask_app, admin_headers, method, url):
    resp = client.open(url, method=method, json={}, headers=admin_headers)
    assert resp.status_code == 403


def test_public_submit_needs_no_token(client, flask_app, fake_sender, sent_emails):
    from conftest import VALID_INQUIRY

    resp = client.post("/contact/inquiry", json=VALID_INQUIRY)
    assert resp.status_code == 201
