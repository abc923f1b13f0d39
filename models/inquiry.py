import uuid
from datetime import datetime

from models._base import db

INQUIRY_STATUSES = ("unread", "read")


def _iso(value):
    return value.isoformat() if value else None


class Inquiry(db.Model):
    __tablename__ = "inquiries"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = db.Column(db.DateTime, default=datetime.now, index=True)
    updated_at = db.Column(
        db.DateTime, default=datetime.now, onupdate=datetime.now, index=True
    )

    # 문의 폼 필드 (전부 필수)
    advertising_state = db.Column(db.String(100), nullable=False)
    advertising_market = db.Column(db.String(100), nullable=False)
    topic = db.Column(db.String(100), nullable=False)
    media = db.Column(db.String(100), nullable=False)
    first_name = db.Column(db.String(50), nullable=False, index=True)
    last_name = db.Column(db.String(50), nullable=False, index=True)
    phone = db.Column(db.String(30), nullable=False, index=True)
    email = db.Column(db.String(100), nullable=False, index=True)
    city = db.Column(db.String(100), nullable=False)
    message = db.Column(db.Text, nullable=False)

    # 관리자 처리 상태
    status = db.Column(db.String(20), nullable=False, default="unread", index=True)
    is_forwarded = db.Column(db.Boolean, nullable=False, default=False)

    notes = db.relationship(
        "InquiryNote",
        back_populates="inquiry",
        order_by="InquiryNote.id",
        cascade="all, delete-orphan",
        lazy=True,
    )

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self):
        return {
            "id": self.id,
            "advertisingState": self.advertising_state,
            "advertisingMarket": self.advertising_market,
            "topic": self.topic,
            "media": self.media,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phone": self.phone,
            "email": self.email,
            "city": self.city,
            "message": self.message,
            "status": self.status,
            "isForwarded": bool(self.is_forwarded),
            "notes": [note.to_dict() for note in self.notes],
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class InquiryNote(db.Model):
    __tablename__ = "inquiry_notes"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    inquiry_id = db.Column(
        db.String(36), db.ForeignKey("inquiries.id"), nullable=False, index=True
    )
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)

    inquiry = db.relationship("Inquiry", back_populates="notes")

    def to_dict(self):
        return {
            "content": self.content,
            "createdAt": _iso(self.created_at),
        }
