"""문의(Inquiry) 서비스 - 접수, 조회, 상태 변경, 메모, 전달."""

import logging
from datetime import datetime

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from models import Inquiry, InquiryNote, db
from schemas import ForwardRequest, InquiryCreate, NoteCreate, StatusUpdate, parse_body
from services.errors import NotFoundError, ServerError
from services.mail_service import send_email
from services.notification_service import NotificationService
from services.scheduler_service import enqueue

logger = logging.getLogger(__name__)


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Inquiry %s error: %s", action, e, exc_info=True)
        raise ServerError("Server error.") from e


def submit(payload):
    """문의 접수. 저장 후 알림 발송은 백그라운드로 넘긴다."""
    form = parse_body(InquiryCreate, payload)

    inquiry = Inquiry(**form.model_dump())
    db.session.add(inquiry)
    _commit("submit")
    logger.info("Inquiry %s submitted by %s", inquiry.id, inquiry.email)

    # 채널마다 별도 작업 - 느린 채널이 다른 채널을 막지 않도록
    app = current_app._get_current_object()
    snapshot = inquiry.to_dict()
    for _, job in NotificationService.new_inquiry_jobs():
        enqueue(app, job, snapshot)
    return inquiry


def list_inquiries():
    """전체 문의 (최신순)."""
    return (
        Inquiry.query.options(selectinload(Inquiry.notes))
        .order_by(Inquiry.created_at.desc(), Inquiry.id)
        .all()
    )


def get_inquiry(inquiry_id):
    inquiry = db.session.get(Inquiry, inquiry_id)
    if not inquiry:
        raise NotFoundError("Inquiry not found.")
    return inquiry


def view(inquiry_id):
    """상세 보기 - 읽지 않은 문의는 read 로 전환 (이미 read 면 변경 없음)."""
    inquiry = get_inquiry(inquiry_id)
    if inquiry.status == "unread":
        inquiry.status = "read"
        _commit("view")
        logger.info("Inquiry %s marked as read on view", inquiry_id)
    return inquiry


def update_status(inquiry_id, payload):
    update = parse_body(StatusUpdate, payload)
    inquiry = get_inquiry(inquiry_id)

    old_status = inquiry.status
    if old_status != update.status:
        inquiry.status = update.status
        _commit("status update")
        logger.info("Status changed for inquiry %s: %s -> %s", inquiry_id, old_status, update.status)
    return inquiry


def add_note(inquiry_id, payload):
    note_in = parse_body(NoteCreate, payload)
    inquiry = get_inquiry(inquiry_id)

    inquiry.notes.append(InquiryNote(content=note_in.content, created_at=datetime.now()))
    _commit("note")
    logger.info("Note added to inquiry %s (total %d)", inquiry_id, len(inquiry.notes))
    return inquiry


def forward(inquiry_id, payload):
    """문의 내용을 외부 메일 주소로 전달. 메일 실패는 호출자에게 그대로 전파한다."""
    request_in = parse_body(ForwardRequest, payload)
    inquiry = get_inquiry(inquiry_id)
    to = str(request_in.forwarding_email)

    subject, body = NotificationService.format_forward_email(inquiry.to_dict())
    send_email(to, subject, body, reply_to=inquiry.email)

    inquiry.is_forwarded = True
    _commit("forward")
    logger.info("Inquiry %s forwarded to %s", inquiry_id, to)
    return to
