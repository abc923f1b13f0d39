"""관리자 알림 피드 / 요약 API 테스트"""
from datetime import datetime, timedelta, timezone

from conftest import make_inquiry


def test_notifications_since_watermark(client, flask_app, admin_headers):
    now = datetime.now()
    make_inquiry(first_name="Before", created_at=now - timedelta(hours=3))
    make_inquiry(first_name="After", created_at=now - timedelta(minutes=5))

    since = (now - timedelta(hours=1)).isoformat()
    resp = client.get(f"/admin/notifications?since={since}", headers=admin_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["count"] == 1
    assert body["notifications"][0]["title"] == "New inquiry from After Rao"
    assert body["since"] == since
    assert datetime.fromisoformat(body["checkedAt"]) >= now


def test_notifications_opened_panel_is_empty(client, flask_app, admin_headers):
    make_inquiry(created_at=datetime.now() - timedelta(minutes=1))
    first = client.get("/admin/notifications", headers=admin_headers).get_json()

    resp = client.get(f"/admin/notifications?since={first['checkedAt']}", headers=admin_headers)
    assert resp.get_json()["count"] == 0


def test_notifications_bad_since(client, flask_app, admin_headers):
    resp = client.get("/admin/notifications?since=yesterday", headers=admin_headers)
    assert resp.status_code == 400


def test_stats(client, flask_app, admin_headers):
    make_inquiry()
    make_inquiry(status="read")
    make_inquiry(status="read", is_forwarded=True)

    resp = client.get("/admin/stats", headers=admin_headers)
    assert resp.get_json() == {"totalInquiries": 3, "unread": 1, "read": 2, "forwarded": 1}


def test_notifications_since_with_utc_offset(client, flask_app, admin_headers):
    """브라우저 toISOString() 형식 ('Z' 접미사) 도 받아야 함"""
    now = datetime.now()
    make_inquiry(first_name="Before", created_at=now - timedelta(hours=3))
    make_inquiry(first_name="After", created_at=now - timedelta(minutes=5))

    since_utc = (now - timedelta(hours=1)).astimezone(timezone.utc)
    for since in (since_utc.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z", since_utc.isoformat()):
        resp = client.get("/admin/notifications", query_string={"since": since}, headers=admin_headers)
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["count"] == 1
        assert body["notifications"][0]["title"] == "New inquiry from After Rao"
