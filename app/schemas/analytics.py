# app/schemas/analytics.py

from typing import Literal, Optional

from pydantic import BaseModel

TimeRangeLiteral = Literal["today", "week", "month", "all"]


class TrackEventIn(BaseModel):
    """POST /api/analytics 用"""
    type: Literal["view", "interaction"]
    profile_id: str
    interaction_type: Optional[str] = None


class InteractionShare(BaseModel):
    type: str
    count: int
    percentage: float


class ProfileRollupOut(BaseModel):
    id: str
    name: Optional[str] = None
    email: str
    slug: str
    is_public: bool
    views: int
    interactions: int
    interaction_rate: str


class DashboardOut(BaseModel):
    time_range: TimeRangeLiteral
    total_views: int
    total_interactions: int
    total_profiles: int
    public_profiles: int
    interaction_breakdown: list[InteractionShare]
    top_profiles: list[ProfileRollupOut]
    profiles: list[ProfileRollupOut]


class WindowCounts(BaseModel):
    today: int
    week: int
    month: int
    total: int


class ProfileAnalyticsOut(BaseModel):
    profile_id: str
    name: Optional[str] = None
    email: str
    total_views: int
    total_interactions: int
    interaction_rate: str
    matrix: dict[str, WindowCounts]
