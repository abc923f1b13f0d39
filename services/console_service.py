"""관리자 콘솔 파생 뷰 - 문의 목록 필터/검색/정렬 + 신규 알림 피드.

서버 저장 없이 계산만 한다. 알림 피드 상태(마지막 확인 시각 등)는
ConsoleSession 객체로 명시적으로 주고받는다.
"""
import unicodedata
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

STATUS_FILTERS = ("all", "read", "unread")
SORT_OPTIONS = ("latest", "oldest", "name")
HISTORY_LIMIT = 15

SEARCH_FIELDS = (
    "email", "message", "topic", "advertisingState",
    "advertisingMarket", "city", "media",
)


def _get(item, key):
    if isinstance(item, dict):
        return item.get(key)
    return getattr(item, key, None)


def _as_dict(item):
    return item if isinstance(item, dict) else item.to_dict()


def parse_timestamp(value) -> datetime:
    """ISO-8601 문자열/datetime → 로컬 naive datetime.

    DB 시각은 naive(서버 로컬)로 저장되므로, 브라우저가 보내는
    'Z' / '+00:00' 같은 오프셋 포함 값은 로컬 시각으로 변환해 맞춘다.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _created(item) -> datetime:
    value = _get(item, "createdAt")
    if value:
        return parse_timestamp(value)
    return datetime.min


def full_name(item) -> str:
    return f"{_get(item, 'firstName') or ''} {_get(item, 'lastName') or ''}".strip()


def _strip_accents(text):
    return "".join(c for c in unicodedata.normalize("NFD", text) if unicodedata.category(c) != "Mn")


def name_sort_key(item):
    """이름 정렬 키. 악센트/대소문자는 1차 비교에서 무시하고 동률일 때만 구분한다."""
    name = full_name(item)
    return (_strip_accents(name).casefold(), name.casefold(), name)


# ── 목록 뷰 ──


def filter_by_status(items, status_filter="all"):
    if status_filter in (None, "", "all"):
        return list(items)
    if status_filter not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter: {status_filter}")
    return [item for item in items if _get(item, "status") == status_filter]


def search(items, term):
    """이름/이메일/메시지 등 대소문자 무시 부분 일치."""
    term = (term or "").strip().lower()
    if not term:
        return list(items)

    def matches(item):
        if term in full_name(item).lower():
            return True
        return any(term in str(_get(item, key) or "").lower() for key in SEARCH_FIELDS)

    return [item for item in items if matches(item)]


def sort_items(items, sort_by="latest"):
    if sort_by in (None, "", "latest"):
        return sorted(items, key=_created, reverse=True)
    if sort_by == "oldest":
        return sorted(items, key=_created)
    if sort_by == "name":
        return sorted(items, key=name_sort_key)
    raise ValueError(f"Unknown sort option: {sort_by}")


def build_inquiry_view(items, status_filter="all", term="", sort_by="latest"):
    """필터 → 검색 → 정렬 순으로 적용한 목록 (dict)."""
    rows = [_as_dict(item) for item in items]
    rows = filter_by_status(rows, status_filter)
    rows = search(rows, term)
    return sort_items(rows, sort_by)


def toggled_status(current_status):
    """읽음/안읽음 토글 대상 상태."""
    return "unread" if current_status == "read" else "read"


# ── 신규 알림 피드 ──


def start_of_today(now=None):
    now = now or datetime.now()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


@dataclass
class Notification:
    kind: str
    item_id: str
    title: str
    created_at: datetime

    def to_dict(self):
        return {
            "kind": self.kind,
            "id": self.item_id,
            "title": self.title,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass
class ConsoleSession:
    """브라우저 세션에 해당하는 알림 상태."""
    last_checked: Optional[datetime] = None
    active: list = field(default_factory=list)
    history: list = field(default_factory=list)

    @property
    def badge_count(self):
        return len(self.active)


def _title(kind, item):
    if kind == "inquiry":
        return f"New inquiry from {full_name(item)}"
    return f"New {kind}: {_get(item, 'title') or _get(item, 'id')}"


class NotificationFeed:
    def __init__(self, session=None, now=None):
        self.session = session or ConsoleSession()
        if self.session.last_checked is None:
            self.session.last_checked = start_of_today(now)

    def collect(self, items_by_kind):
        """watermark 이후 생성된 항목을 활성 알림으로 추가. 새로 추가된 알림 목록 반환."""
        known = {(n.kind, n.item_id) for n in self.session.active}
        added = []
        for kind, items in items_by_kind.items():
            for item in items:
                created = _created(item)
                key = (kind, str(_get(item, "id")))
                if created > self.session.last_checked and key not in known:
                    note = Notification(kind, key[1], _title(kind, item), created)
                    added.append(note)
                    known.add(key)
        added.sort(key=lambda n: n.created_at, reverse=True)
        self.session.active = sorted(
            self.session.active + added, key=lambda n: n.created_at, reverse=True
        )
        return added

    def open_panel(self, now=None):
        """패널 열기 - 활성 알림을 히스토리(최대 15개)로 옮기고 watermark 갱신."""
        self.session.history = (self.session.active + self.session.history)[:HISTORY_LIMIT]
        self.session.active = []
        self.session.last_checked = now or datetime.now()
        return self.session.history
