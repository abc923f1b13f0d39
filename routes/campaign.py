"""캠페인(ATL/BTL/TTL) 페이지 간편 문의.

DB 에 저장하지 않으므로 관리자 메일이 유일한 기록이다 - 메일 실패는 500 으로 알린다.
WhatsApp 알림은 백그라운드에서 best-effort 로 보낸다.
"""

import logging
from datetime import datetime

from flask import Blueprint, current_app, jsonify, request

from extensions import limiter
from schemas import CampaignInquiry, parse_body
from services.errors import DispatchError
from services.mail_service import send_email
from services.notification_service import NotificationService
from services.scheduler_service import enqueue

logger = logging.getLogger(__name__)

campaign_bp = Blueprint("campaign", __name__)

CAMPAIGN_CHANNELS = ("ATL", "BTL", "TTL")


def _public_form_limit():
    return current_app.config.get("PUBLIC_FORM_LIMIT", "10 per minute")


@campaign_bp.route("/atl/ATL-inquiry", methods=["POST"], defaults={"channel": "ATL"})
@campaign_bp.route("/btl/BTL-inquiry", methods=["POST"], defaults={"channel": "BTL"})
@campaign_bp.route("/ttl/TTL-inquiry", methods=["POST"], defaults={"channel": "TTL"})
@limiter.limit(_public_form_limit)
def campaign_inquiry(channel):
    form = parse_body(CampaignInquiry, request.get_json(silent=True))
    data = form.model_dump(by_alias=True)
    data["createdAt"] = datetime.now().isoformat()

    admin_email = current_app.config.get("ADMIN_EMAIL")
    if not admin_email:
        logger.error("%s inquiry received but ADMIN_EMAIL is not set", channel)
        raise DispatchError("Inquiry could not be delivered. Please try again later.")

    subject, body = NotificationService.format_campaign_email(channel, data)
    send_email(admin_email, subject, body, reply_to=data["email"])
    logger.info("%s inquiry e-mailed to admin (%s)", channel, data["email"])

    app = current_app._get_current_object()
    for _, job in NotificationService.campaign_followup_jobs():
        enqueue(app, job, channel, data)

    return jsonify({"success": True, "message": "Inquiry sent successfully! We will be in touch shortly."})
