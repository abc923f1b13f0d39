from models._base import db
from models.inquiry import INQUIRY_STATUSES, Inquiry, InquiryNote
from models.auth import USER_ROLES, LoginAttempt, User

__all__ = [
    "db",
    "INQUIRY_STATUSES",
    "Inquiry",
    "InquiryNote",
    "USER_ROLES",
    "LoginAttempt",
    "User",
]
