# app/schemas/report.py

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

ReasonLiteral = Literal[
    "fake_profile",
    "inappropriate_content",
    "scam",
    "underage",
    "spam",
    "other",
]
StatusLiteral = Literal["pending", "reviewed", "resolved", "dismissed"]


class ReportCreate(BaseModel):
    """POST /api/reports 用（未ログインでも送信可）"""
    profile_id: Optional[str] = None
    profile_url: Optional[str] = None
    reason: ReasonLiteral
    description: Optional[str] = None
    reporter_name: Optional[str] = None
    reporter_email: Optional[str] = None


class ReportCreated(BaseModel):
    message: str
    report_id: str


class ReportUpdate(BaseModel):
    status: StatusLiteral
    admin_notes: Optional[str] = None


class ReportOut(BaseModel):
    id: str
    profile_id: Optional[str]
    profile_url: Optional[str]
    reason: str
    description: Optional[str]
    reporter_name: Optional[str]
    reporter_email: Optional[str]
    status: str
    admin_notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
