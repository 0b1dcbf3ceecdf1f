# app/schemas/profile.py

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..services.subscription import EXPIRY_FIELDS

GenderLiteral = Literal["female", "male", "transsexual"]
RoleLiteral = Literal["escort", "admin"]


class PresenceOut(BaseModel):
    is_online: Optional[bool] = None
    label: Optional[str] = None


class TierFlags(BaseModel):
    """期限から導出したフラグ（保存はしない）"""
    is_public: bool
    is_gold: bool
    is_silver: bool
    is_featured: bool
    is_verified_photos: bool


class EscortOut(TierFlags):
    """一覧・詳細のレスポンス用"""
    id: str
    slug: str
    name: Optional[str] = None
    city: str
    district: Optional[str] = None
    gender: str
    about: Optional[str] = None
    phone: str
    whatsapp_available: bool
    viber_available: bool
    last_active: Optional[datetime] = None
    created_at: datetime
    presence: PresenceOut


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """DB には naive UTC で持つので、タイムゾーン付きの入力は UTC に寄せる"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ProfileCreate(BaseModel):
    """POST /api/admin/users 用"""
    email: str
    slug: Optional[str] = None
    name: Optional[str] = None
    role: RoleLiteral = "escort"
    phone: str = ""
    whatsapp_available: bool = False
    viber_available: bool = False
    city: str
    district: Optional[str] = None
    gender: GenderLiteral
    about: Optional[str] = None

    gold_expires_at: Optional[datetime] = None
    silver_expires_at: Optional[datetime] = None
    featured_expires_at: Optional[datetime] = None
    verified_photos_expiry: Optional[datetime] = None
    public_expiry: Optional[datetime] = None

    @field_validator(*EXPIRY_FIELDS)
    @classmethod
    def normalize_expiry(cls, value):
        return _to_naive_utc(value)


class ProfileUpdate(BaseModel):
    """
    PATCH /api/admin/users/{id} 用。
    送られてきたキーだけ更新する（期限は null を送ると解除）。
    """
    role: Optional[RoleLiteral] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None

    gold_expires_at: Optional[datetime] = None
    silver_expires_at: Optional[datetime] = None
    featured_expires_at: Optional[datetime] = None
    verified_photos_expiry: Optional[datetime] = None
    public_expiry: Optional[datetime] = None

    @field_validator(*EXPIRY_FIELDS)
    @classmethod
    def normalize_expiry(cls, value):
        return _to_naive_utc(value)


class AdminUserOut(TierFlags):
    id: str
    email: str
    slug: str
    name: Optional[str] = None
    role: str
    phone: str
    city: str
    district: Optional[str] = None
    gender: str

    gold_expires_at: Optional[datetime] = None
    silver_expires_at: Optional[datetime] = None
    featured_expires_at: Optional[datetime] = None
    verified_photos_expiry: Optional[datetime] = None
    public_expiry: Optional[datetime] = None

    last_active: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
