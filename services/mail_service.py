"""
SMTP 메일 발송 서비스
SMTP 설정이 없으면 로그만 출력한다 (MOCK).
"""
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from flask import current_app

from services.errors import DispatchError

logger = logging.getLogger(__name__)


def send_email(to, subject, body, reply_to=None):
    """메일 발송. 실패 시 DispatchError."""
    cfg = current_app.config
    smtp_user = cfg.get('SMTP_USER')
    smtp_pass = cfg.get('SMTP_PASS')
    sender = cfg.get('MAIL_FROM') or smtp_user

    if not to:
        raise DispatchError("Recipient e-mail address is not set.")

    if not all([smtp_user, smtp_pass]):
        logger.info(f"[MOCK EMAIL] To: {to} | Subject: {subject} | Body: {body}")
        logger.info("  => SMTP settings are missing; e-mail was not actually sent.")
        return {"success": True, "detail": "mock"}

    try:
        msg = MIMEMultipart()
        msg['From'] = sender
        msg['To'] = to
        msg['Subject'] = subject
        if reply_to:
            msg['Reply-To'] = reply_to
        msg.attach(MIMEText(body, 'plain', 'utf-8'))

        with smtplib.SMTP_SSL(
            cfg.get('SMTP_HOST', 'smtp.gmail.com'),
            int(cfg.get('SMTP_PORT', 465)),
            timeout=float(cfg.get('SMTP_TIMEOUT', 10.0)),
        ) as server:
            server.login(smtp_user, smtp_pass)
            server.send_message(msg)

        logger.info(f"[EMAIL SENT] To: {to} | Subject: {subject}")
        return {"success": True, "detail": "sent"}
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"[EMAIL FAILED] To: {to} | {e}")
        raise DispatchError(f"Failed to send e-mail: {e}") from e
