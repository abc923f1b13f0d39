"""
WhatsApp 메신저 발송 서비스

QR 스캔으로 인증되는 WhatsApp Web 세션을 HTTP 게이트웨이로 감싸서 사용한다.
나머지 코드는 MessagingSender 인터페이스(send/is_ready)에만 의존한다.
"""
import abc
import logging
import re
import time

import requests

from services.errors import ChannelNotReadyError, DispatchError

logger = logging.getLogger(__name__)

READY_STATUSES = {"WORKING", "CONNECTED", "READY"}


def _clean_phone(phone) -> str:
    """전화번호에서 숫자만 추출 (+91 98765-43210 → 919876543210)."""
    return re.sub(r"[^0-9]", "", str(phone or ""))


def to_whatsapp_id(phone, country_code: str = "91"):
    """전화번호 → WhatsApp 식별자 (<digits>@c.us).

    - 10자리: 국내 번호로 보고 국가코드를 붙인다
    - 12자리 + 국가코드로 시작: 그대로 사용
    - 그 외: None (발송 대상 아님)
    """
    digits = _clean_phone(phone)
    if len(digits) == 10:
        return f"{country_code}{digits}@c.us"
    if len(digits) == 10 + len(country_code) and digits.startswith(country_code):
        return f"{digits}@c.us"
    return None


class MessagingSender(abc.ABC):
    """메신저 발송 인터페이스."""

    poll_interval = 1.0
    ready_timeout = 30.0

    @abc.abstractmethod
    def is_ready(self) -> bool:
        ...

    @abc.abstractmethod
    def _deliver(self, identity: str, text: str) -> dict:
        ...

    def wait_until_ready(self, timeout=None, interval=None):
        """세션 준비될 때까지 interval 간격으로 폴링. 시간 초과 시 ChannelNotReadyError."""
        timeout = self.ready_timeout if timeout is None else timeout
        interval = self.poll_interval if interval is None else interval
        deadline = time.monotonic() + timeout
        while True:
            if self.is_ready():
                return
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise ChannelNotReadyError()
            logger.info("[WHATSAPP] Waiting for session... (%.1fs left)", remaining)
            time.sleep(min(interval, remaining))

    def send(self, identity: str, text: str) -> dict:
        self.wait_until_ready()
        return self._deliver(identity, text)


class WhatsAppGatewaySender(MessagingSender):
    """WhatsApp Web HTTP 게이트웨이 어댑터.

    - GET  {base}/api/sessions/{session}  → {"status": "WORKING", ...}
    - POST {base}/api/sendText            → {"session", "chatId", "text"}
    게이트웨이 URL이 없으면 로그만 출력한다 (MOCK).
    """

    def __init__(self, base_url=None, api_key=None, session="default",
                 ready_timeout=30.0, poll_interval=1.0, request_timeout=20):
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key or ""
        self.session = session
        self.ready_timeout = ready_timeout
        self.poll_interval = poll_interval
        self.request_timeout = request_timeout

    @classmethod
    def from_config(cls, config):
        return cls(
            base_url=config.get("WHATSAPP_GATEWAY_URL"),
            api_key=config.get("WHATSAPP_API_KEY"),
            session=config.get("WHATSAPP_SESSION", "default"),
            ready_timeout=float(config.get("MESSAGING_READY_TIMEOUT", 30.0)),
            poll_interval=float(config.get("MESSAGING_POLL_INTERVAL", 1.0)),
        )

    @property
    def configured(self) -> bool:
        return bool(self.base_url)

    def _headers(self):
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["X-Api-Key"] = self.api_key
        return headers

    def is_ready(self) -> bool:
        if not self.configured:
            return True
        try:
            r = requests.get(
                f"{self.base_url}/api/sessions/{self.session}",
                headers=self._headers(),
                timeout=self.request_timeout,
            )
        except requests.RequestException as e:
            logger.warning("[WHATSAPP] Session status check failed: %s", e)
            return False
        if r.status_code != 200:
            return False
        try:
            status = str((r.json() or {}).get("status", "")).upper()
        except ValueError:
            return False
        return status in READY_STATUSES

    def _deliver(self, identity: str, text: str) -> dict:
        if not self.configured:
            logger.info(f"[MOCK WHATSAPP] To: {identity} | Msg: {text}")
            logger.info("  => WHATSAPP_GATEWAY_URL is not set; message was not sent.")
            return {"success": True, "detail": "mock"}

        try:
            r = requests.post(
                f"{self.base_url}/api/sendText",
                headers=self._headers(),
                json={"session": self.session, "chatId": identity, "text": text},
                timeout=self.request_timeout,
            )
        except requests.RequestException as e:
            logger.error(f"[WHATSAPP FAILED] {identity}: {e}")
            raise DispatchError(f"Failed to send WhatsApp message: {e}") from e

        if not 200 <= r.status_code < 300:
            logger.error("[WHATSAPP FAILED] %s: HTTP %s %s", identity, r.status_code, r.text[:300])
            raise DispatchError(f"Failed to send WhatsApp message: HTTP {r.status_code}")

        logger.info(f"[WHATSAPP SENT] To: {identity}")
        return {"success": True, "detail": f"HTTP {r.status_code}"}


def get_sender(config) -> MessagingSender:
    return WhatsAppGatewaySender.from_config(config)
