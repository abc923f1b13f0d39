import logging
from datetime import datetime

from flask import current_app

from services.errors import DispatchError
from services.mail_service import send_email
from services.messaging_service import get_sender, to_whatsapp_id

logger = logging.getLogger(__name__)

INQUIRY_FIELDS = [
    ("firstName", "First Name"),
    ("lastName", "Last Name"),
    ("email", "Email"),
    ("phone", "Phone"),
    ("city", "City"),
    ("advertisingState", "Ad State"),
    ("advertisingMarket", "Ad Market"),
    ("topic", "Topic"),
    ("media", "Media"),
]


def _received_text(data):
    created = data.get("createdAt")
    if created:
        try:
            return datetime.fromisoformat(created).strftime("%d %b %Y, %I:%M %p")
        except (TypeError, ValueError):
            return str(created)
    return datetime.now().strftime("%d %b %Y, %I:%M %p")


def _inquiry_lines(data):
    return [f"{label}: {data.get(key) or 'N/A'}" for key, label in INQUIRY_FIELDS]


class NotificationService:
    @staticmethod
    def format_admin_email(data):
        subject = f"New Contact Inquiry: {data.get('topic') or 'General'} from {data.get('firstName', '')} {data.get('lastName', '')}".strip()
        body = "\n".join(
            ["A new inquiry was submitted through the Contact Us form.", ""]
            + _inquiry_lines(data)
            + ["", "Message:", data.get("message") or "(No message)", "", f"Received: {_received_text(data)}"]
        )
        return subject, body

    @staticmethod
    def format_forward_email(data):
        subject = f"Forwarded Inquiry: {data.get('topic') or 'General'} ({data.get('firstName', '')} {data.get('lastName', '')})"
        body = "\n".join(
            ["The following customer inquiry has been forwarded to you for follow-up.", ""]
            + _inquiry_lines(data)
            + ["", "Message:", data.get("message") or "(No message)", "", f"Received: {_received_text(data)}"]
        )
        return subject, body

    @staticmethod
    def format_admin_whatsapp(data):
        return "\n".join([
            "📝 *New Contact Inquiry*",
            "",
            f"👤 *Name:* {data.get('firstName', '')} {data.get('lastName', '')}",
            f"📞 *Phone:* {data.get('phone') or 'N/A'}",
            f"✉️ *Email:* {data.get('email') or 'N/A'}",
            f"📍 *City:* {data.get('city') or 'N/A'}",
            f"📊 *Ad State:* {data.get('advertisingState') or 'N/A'}",
            f"🏙️ *Ad Market:* {data.get('advertisingMarket') or 'N/A'}",
            f"💡 *Topic:* {data.get('topic') or 'N/A'}",
            f"📺 *Media:* {data.get('media') or 'N/A'}",
            "",
            "💬 *Message:*",
            data.get("message") or "(No message)",
            "",
            f"🕐 *Received:* {_received_text(data)}",
            "",
            "🔗 _Sent via the Contact Us Form on your website_",
        ])

    @staticmethod
    def format_receipt(first_name):
        cfg = current_app.config
        return "\n".join([
            f"👋 *Hello {first_name},*",
            "",
            f"Thank you for contacting *{cfg.get('COMPANY_NAME')}*! "
            "We've received your inquiry and will get back to you shortly.",
            "",
            "If you have urgent questions, feel free to reach out via our website "
            f"or call ({cfg.get('SUPPORT_PHONE')}).",
            "",
            f"📍 _{cfg.get('COMPANY_NAME')} Team_",
            "",
            "🔔 _This is an automated message_",
        ])

    @staticmethod
    def format_campaign_email(channel, data):
        subject = f"New {channel} Inquiry from {data.get('firstName', '')} {data.get('lastName', '')}"
        body = "\n".join([
            f"An inquiry has been received from the {channel} page.",
            "",
            f"Name: {data.get('firstName', '')} {data.get('lastName', '')}",
            f"Phone: {data.get('phoneNumber') or 'N/A'}",
            f"Email: {data.get('email') or 'N/A'}",
            "",
            "Please follow up with them at your earliest convenience.",
            f"Received: {_received_text(data)}",
        ])
        return subject, body

    @staticmethod
    def format_campaign_whatsapp(channel, data):
        return "\n".join([
            f"🆕 *New {channel} Inquiry*",
            "",
            f"An inquiry has been received from the {channel} page.",
            "",
            f"👤 *Name:* {data.get('firstName', '')} {data.get('lastName', '')}",
            f"📞 *Phone:* {data.get('phoneNumber') or 'N/A'}",
            f"✉️ *Email:* {data.get('email') or 'N/A'}",
            "",
            "Please follow up with them at your earliest convenience.",
            "",
            f"*Received:* {_received_text(data)}",
        ])

    # ── 발송 ──

    @staticmethod
    def _attempt(label, func, *args):
        """채널 하나 발송. 실패는 로그만 남기고 결과 문자열로 돌려준다."""
        try:
            func(*args)
            return "sent"
        except DispatchError as e:
            logger.error("[NOTIFY] %s failed: %s", label, e)
            return f"failed: {e}"
        except Exception as e:
            logger.error("[NOTIFY] %s failed unexpectedly: %s", label, e, exc_info=True)
            return f"failed: {e}"

    @staticmethod
    def send_whatsapp(phone, text):
        cfg = current_app.config
        identity = to_whatsapp_id(phone, cfg.get("DEFAULT_COUNTRY_CODE", "91"))
        if not identity:
            return None
        get_sender(cfg).send(identity, text)
        return identity

    @staticmethod
    def _whatsapp_attempt(label, phone, text):
        """번호가 유효하지 않으면 발송 생략 (경고 로그)."""
        cfg = current_app.config
        if not to_whatsapp_id(phone, cfg.get("DEFAULT_COUNTRY_CODE", "91")):
            logger.warning("[NOTIFY] %s skipped: invalid phone number for WhatsApp: %r", label, phone)
            return "skipped"
        return NotificationService._attempt(label, NotificationService.send_whatsapp, phone, text)

    # ── 신규 문의: 채널별 작업 (스케줄러에 각각 따로 등록) ──

    @staticmethod
    def notify_admin_email(data):
        admin_email = current_app.config.get("ADMIN_EMAIL")
        if not admin_email:
            logger.warning("[NOTIFY] ADMIN_EMAIL is not set; admin e-mail skipped")
            return "skipped"
        subject, body = NotificationService.format_admin_email(data)
        result = NotificationService._attempt(
            "admin e-mail", send_email, admin_email, subject, body, data.get("email")
        )
        logger.info("[NOTIFY] inquiry=%s admin e-mail: %s", data.get("id"), result)
        return result

    @staticmethod
    def notify_admin_whatsapp(data):
        result = NotificationService._whatsapp_attempt(
            "admin WhatsApp", current_app.config.get("INQUIRY_RECEIVER_PHONE"),
            NotificationService.format_admin_whatsapp(data),
        )
        logger.info("[NOTIFY] inquiry=%s admin WhatsApp: %s", data.get("id"), result)
        return result

    @staticmethod
    def notify_customer_receipt(data):
        result = NotificationService._whatsapp_attempt(
            "customer receipt", data.get("phone"),
            NotificationService.format_receipt(data.get("firstName", "")),
        )
        logger.info("[NOTIFY] inquiry=%s customer receipt: %s", data.get("id"), result)
        return result

    @staticmethod
    def new_inquiry_jobs():
        """신규 문의 알림 채널 목록 (결과 키, 작업 함수)."""
        return (
            ("admin_email", NotificationService.notify_admin_email),
            ("admin_whatsapp", NotificationService.notify_admin_whatsapp),
            ("customer_whatsapp", NotificationService.notify_customer_receipt),
        )

    @staticmethod
    def dispatch_new_inquiry(data):
        """신규 문의 접수 알림을 현재 스레드에서 모두 실행하고 결과를 모은다.

        채널마다 독립된 에러 경계를 가지며, 어떤 실패도 호출자에게 전파하지 않는다.
        접수 API 는 채널별로 enqueue 하므로 이 함수를 쓰지 않는다.
        """
        return {key: job(data) for key, job in NotificationService.new_inquiry_jobs()}

    # ── 캠페인 문의 부가 알림 ──

    @staticmethod
    def notify_campaign_admin(channel, data):
        return NotificationService._whatsapp_attempt(
            f"{channel} admin WhatsApp", current_app.config.get("INQUIRY_RECEIVER_PHONE"),
            NotificationService.format_campaign_whatsapp(channel, data),
        )

    @staticmethod
    def notify_campaign_receipt(channel, data):
        return NotificationService._whatsapp_attempt(
            f"{channel} customer receipt", data.get("phoneNumber"),
            NotificationService.format_receipt(data.get("firstName", "")),
        )

    @staticmethod
    def campaign_followup_jobs():
        return (
            ("admin_whatsapp", NotificationService.notify_campaign_admin),
            ("customer_whatsapp", NotificationService.notify_campaign_receipt),
        )

    @staticmethod
    def dispatch_campaign_followups(channel, data):
        """캠페인 문의의 부가 알림 (관리자 WhatsApp / 고객 접수확인)."""
        results = {key: job(channel, data) for key, job in NotificationService.campaign_followup_jobs()}
        logger.info("[NOTIFY] %s inquiry dispatch results: %s", channel, results)
        return results
