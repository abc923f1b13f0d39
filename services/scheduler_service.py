"""APScheduler 기반 백그라운드 작업 서비스.

- 신규 문의 알림 발송을 1회성 작업으로 실행 (HTTP 응답과 분리)
- 주기적으로 WhatsApp 세션 상태를 점검해 로그로 남긴다
gunicorn --preload 모드에서 단일 스케줄러만 동작하도록 설계.
"""

import logging
import os
import uuid
from datetime import datetime

from apscheduler.schedulers.background import BackgroundScheduler

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler(daemon=True)


def _run_in_app(app, func, *args):
    """앱 컨텍스트 안에서 작업 실행. 실패는 로그만 남긴다."""
    with app.app_context():
        try:
            func(*args)
        except Exception:
            logger.exception("[스케줄러] 작업 실패: %s", getattr(func, "__qualname__", func))


def enqueue(app, func, *args):
    """작업을 즉시 1회 실행하도록 등록한다.

    스케줄러가 꺼져 있으면(SCHEDULER_DISABLED=1, 테스트 등) 현재 스레드에서 바로 실행.
    """
    if not scheduler.running:
        _run_in_app(app, func, *args)
        return None

    job = scheduler.add_job(
        func=_run_in_app,
        trigger="date",
        run_date=datetime.now(),
        args=[app, func, *args],
        id=f"oneoff-{uuid.uuid4().hex}",
        misfire_grace_time=300,
    )
    logger.info("[스케줄러] 1회성 작업 등록: %s (%s)", getattr(func, "__qualname__", func), job.id)
    return job


def _check_messaging_session(app):
    """WhatsApp 게이트웨이 세션 상태 점검 (QR 재스캔 필요 여부 확인용)."""
    with app.app_context():
        from services.messaging_service import get_sender

        sender = get_sender(app.config)
        if not getattr(sender, "configured", True):
            return
        if sender.is_ready():
            logger.info("[세션점검] WhatsApp 세션 정상")
        else:
            logger.warning("[세션점검] WhatsApp 세션이 준비되지 않았습니다. 게이트웨이에서 QR 재스캔이 필요할 수 있습니다.")


def init_scheduler(app):
    """Flask 앱에 APScheduler를 연결하고 세션 점검 작업을 등록한다.

    환경변수 SCHEDULER_DISABLED=1 로 비활성화 가능 (gunicorn 멀티워커 시 활용).
    """
    if scheduler.running:
        return
    if os.environ.get("SCHEDULER_DISABLED", "") == "1":
        logger.info("[스케줄러] SCHEDULER_DISABLED=1 - 스케줄러 비활성화")
        return

    interval = int(app.config.get("MESSAGING_HEALTH_INTERVAL", 300))
    scheduler.add_job(
        func=_check_messaging_session,
        trigger="interval",
        seconds=interval,
        args=[app],
        id="messaging_session_check",
        replace_existing=True,
        max_instances=1,
    )
    scheduler.start()
    logger.info("[스케줄러] APScheduler 시작 - WhatsApp 세션 점검 주기: %d초", interval)
