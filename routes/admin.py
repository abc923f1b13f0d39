import logging
from datetime import datetime

from flask import Blueprint, jsonify, request

from routes.utils import require_admin
from services import console_service, inquiry_service
from services.errors import ValidationError

# Logger 설정
logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')


def _parse_since(raw):
    if not raw:
        return None
    try:
        return console_service.parse_timestamp(raw)
    except ValueError as e:
        raise ValidationError("since must be an ISO-8601 timestamp") from e


@admin_bp.route('/notifications')
@require_admin
def notifications():
    """신규 알림 피드.

    서버는 상태를 저장하지 않는다. 클라이언트가 마지막 확인 시각(since)을 넘기고,
    패널을 열면 응답의 checkedAt 을 다음 since 로 보관한다.
    since 가 없으면 오늘 0시 기준.
    """
    session = console_service.ConsoleSession(last_checked=_parse_since(request.args.get('since')))
    feed = console_service.NotificationFeed(session)
    feed.collect({"inquiry": [i.to_dict() for i in inquiry_service.list_inquiries()]})

    return jsonify({
        "since": session.last_checked.isoformat(),
        "checkedAt": datetime.now().isoformat(),
        "count": session.badge_count,
        "notifications": [n.to_dict() for n in session.active],
    })


@admin_bp.route('/stats')
@require_admin
def stats_api():
    """대시보드 요약 수치"""
    rows = [i.to_dict() for i in inquiry_service.list_inquiries()]
    return jsonify({
        "totalInquiries": len(rows),
        "unread": len(console_service.filter_by_status(rows, "unread")),
        "read": len(console_service.filter_by_status(rows, "read")),
        "forwarded": sum(1 for r in rows if r["isForwarded"]),
    })
