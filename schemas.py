"""요청 본문 스키마 (pydantic).

API 경계에서 한 번만 검증하고, 이후 서비스 계층은 검증된 값만 다룬다.
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic import ValidationError as SchemaError

from services.errors import ValidationError

RequiredText = Field(min_length=1, max_length=5000)


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class InquiryCreate(_RequestModel):
    advertising_state: str = Field(alias="advertisingState", min_length=1, max_length=100)
    advertising_market: str = Field(alias="advertisingMarket", min_length=1, max_length=100)
    topic: str = Field(min_length=1, max_length=100)
    media: str = Field(min_length=1, max_length=100)
    first_name: str = Field(alias="firstName", min_length=1, max_length=50)
    last_name: str = Field(alias="lastName", min_length=1, max_length=50)
    phone: str = Field(min_length=1, max_length=30)
    email: str = Field(min_length=1, max_length=100)
    city: str = Field(min_length=1, max_length=100)
    message: str = RequiredText


class StatusUpdate(_RequestModel):
    status: Literal["unread", "read"]


class NoteCreate(_RequestModel):
    content: str = RequiredText


class ForwardRequest(_RequestModel):
    forwarding_email: EmailStr = Field(alias="forwardingEmail")


class LoginRequest(_RequestModel):
    email: str = Field(min_length=1, max_length=120)
    password: str = Field(min_length=1, max_length=200)


class UserCreate(_RequestModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=200)
    role: Literal["admin", "superAdmin"] = "admin"


class UserUpdate(_RequestModel):
    role: Optional[Literal["admin", "superAdmin"]] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")


class CampaignInquiry(_RequestModel):
    first_name: str = Field(alias="firstName", min_length=1, max_length=50)
    last_name: str = Field(alias="lastName", min_length=1, max_length=50)
    email: str = Field(min_length=1, max_length=100)
    phone_number: str = Field(alias="phoneNumber", min_length=1, max_length=30)


def _field_label(model, loc):
    """에러 위치를 JSON 필드명(alias)으로 변환."""
    if not loc:
        return "body"
    name = loc[0]
    field = model.model_fields.get(name)
    if field is not None and field.alias:
        return field.alias
    return str(name)


def parse_body(model, data):
    """JSON dict 를 스키마로 검증. 실패 시 ValidationError(400)."""
    if not isinstance(data, dict):
        raise ValidationError("JSON body required")
    try:
        return model.model_validate(data)
    except SchemaError as exc:
        missing, invalid = [], []
        for err in exc.errors():
            label = _field_label(model, err.get("loc"))
            if err.get("type") in ("missing", "string_too_short"):
                missing.append(label)
            else:
                invalid.append(label)
        if missing:
            raise ValidationError(
                f"Missing required field(s): {', '.join(dict.fromkeys(missing))}"
            ) from exc
        raise ValidationError(
            f"Invalid value for: {', '.join(dict.fromkeys(invalid))}"
        ) from exc
