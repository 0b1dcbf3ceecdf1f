# app/schemas/listing.py

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from .profile import EscortOut


class Pagination(BaseModel):
    total: int
    limit: int
    offset: int
    current_page: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


class ListingMeta(BaseModel):
    timestamp: datetime
    ordering: str
    filters: dict[str, Any]


class EscortListOut(BaseModel):
    items: list[EscortOut]
    pagination: Pagination
    meta: ListingMeta


class StatusRequest(BaseModel):
    """POST /api/escorts/status 用"""
    profile_ids: list[str] = []


class StatusOut(BaseModel):
    statuses: dict[str, Optional[datetime]]
