"""백그라운드 작업 등록 테스트"""
import logging
import threading
import time

import pytest
from apscheduler.schedulers.background import BackgroundScheduler

from conftest import VALID_INQUIRY
from services import scheduler_service


def test_enqueue_runs_inline_when_scheduler_stopped(flask_app):
    calls = []

    def job(value):
        from flask import current_app
        calls.append((value, current_app.name))

    assert not scheduler_service.scheduler.running
    assert scheduler_service.enqueue(flask_app, job, 42) is None
    assert calls == [(42, flask_app.name)]


def test_enqueue_job_failure_is_logged(flask_app, caplog):
    def job():
        raise RuntimeError("boom")

    with caplog.at_level(logging.ERROR, logger="services.scheduler_service"):
        scheduler_service.enqueue(flask_app, job)
    assert "boom" in caplog.text


def test_session_check_logs_not_ready(flask_app, fake_sender, monkeypatch, caplog):
    import services.messaging_service as messaging_module

    fake_sender.ready = False
    monkeypatch.setattr(messaging_module, "get_sender", lambda config: fake_sender)
    with caplog.at_level(logging.WARNING, logger="services.scheduler_service"):
        scheduler_service._check_messaging_session(flask_app)
    assert "QR" in caplog.text


# ── 스케줄러 동작 중: 접수 응답과 알림 발송 분리 ──

@pytest.fixture
def running_scheduler(monkeypatch):
    sched = BackgroundScheduler(daemon=True)
    sched.start()
    monkeypatch.setattr(scheduler_service, "scheduler", sched)
    yield sched
    if sched.running:
        sched.shutdown(wait=True)


def _wait_for(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_enqueue_registers_job_when_running(flask_app, running_scheduler):
    done = threading.Event()
    job = scheduler_service.enqueue(flask_app, done.set)
    assert job is not None
    assert done.wait(3)


def test_submit_returns_before_messaging_ready(client, flask_app, running_scheduler, fake_sender, sent_emails):
    """WhatsApp 세션이 준비되지 않아도 응답은 대기 시간보다 먼저 돌아온다"""
    fake_sender.ready = False
    fake_sender.ready_timeout = 1.5

    started = time.monotonic()
    resp = client.post("/contact/inquiry", json=VALID_INQUIRY)
    elapsed = time.monotonic() - started

    assert resp.status_code == 201
    assert elapsed < fake_sender.ready_timeout

    assert _wait_for(lambda: len(sent_emails) == 1)
    running_scheduler.shutdown(wait=True)
    assert fake_sender.sent == []
    assert len(sent_emails) == 1


def test_slow_email_does_not_delay_whatsapp(client, flask_app, running_scheduler, fake_sender, monkeypatch):
    """메일 채널이 멈춰 있어도 WhatsApp 두 건은 먼저 발송된다"""
    import services.notification_service as notification_module

    release = threading.Event()
    emails = []

    def _stuck_send_email(to, subject, body, reply_to=None):
        release.wait(5)
        emails.append(to)
        return {"success": True, "detail": "fake"}

    monkeypatch.setattr(notification_module, "send_email", _stuck_send_email)

    resp = client.post("/contact/inquiry", json=VALID_INQUIRY)
    assert resp.status_code == 201

    try:
        assert _wait_for(lambda: len(fake_sender.sent) == 2)
        assert emails == []
    finally:
        release.set()

    running_scheduler.shutdown(wait=True)
    assert emails == ["inbox@starpublicity.test"]
