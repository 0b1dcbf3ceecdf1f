# app/services/listing.py
"""
一覧 API（GET /api/escorts）の検索条件・並び順・ページングの組み立て。

- 必須条件: role == 'escort' かつ public_expiry > now（公開中のみ）
- 任意フィルタ: 検索語 / 都市 / 地区 / 性別 / 各ティア / new / online（すべて AND）
- 並び順: フィルタなし → gold, silver, created_at の降順
          フィルタあり → created_at の降順のみ
"""
import math
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional

from pydantic import BaseModel
from sqlalchemy import and_, case, or_
from sqlalchemy.orm import Session

from ..config import settings
from ..data.locations import city_name, resolve_city_alias
from ..models.profile import Profile

NEW_WINDOW = timedelta(days=30)
ONLINE_WINDOW = timedelta(seconds=30)

LISTABLE_ROLE = "escort"
ALL_VALUE = "all"

TIER_FLAG_COLUMNS = {
    "gold": "gold_expires_at",
    "silver": "silver_expires_at",
    "featured": "featured_expires_at",
    "verified_photos": "verified_photos_expiry",
}


class OrderingMode(str, Enum):
    UNFILTERED = "unfiltered"
    FILTERED = "filtered"


class ListingFilters(BaseModel):
    search: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    gender: Optional[str] = None
    gold: bool = False
    silver: bool = False
    featured: bool = False
    verified_photos: bool = False
    new: bool = False
    online: bool = False
    limit: int = 20
    offset: int = 0

    def has_filters(self) -> bool:
        """任意フィルタが 1 つでも指定されているか（'all' は未指定扱い）"""
        return bool(
            self.search
            or (self.city and self.city != ALL_VALUE)
            or (self.district and self.district != ALL_VALUE)
            or self.gender
            or self.gold
            or self.silver
            or self.featured
            or self.verified_photos
            or self.new
            or self.online
        )

    def ordering_mode(self) -> OrderingMode:
        return OrderingMode.FILTERED if self.has_filters() else OrderingMode.UNFILTERED

    def echo(self) -> dict[str, Any]:
        """レスポンスの meta.filters 用"""
        return self.model_dump(exclude={"limit", "offset"})


class ListingQuery(NamedTuple):
    conditions: list
    ordering_mode: OrderingMode
    order_by: list
    limit: int
    offset: int


# -----------------------------
# 入力のパース（例外は投げずに既定値へ倒す）
# -----------------------------

def parse_int(raw: Any, default: int) -> int:
    if raw is None:
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        return default


def parse_flag(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return str(raw).strip().lower() in ("true", "1")


def _clean_text(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def parse_filters(params: Mapping[str, Any]) -> ListingFilters:
    limit = parse_int(params.get("limit"), settings.DEFAULT_PAGE_LIMIT)
    if limit <= 0:
        limit = settings.DEFAULT_PAGE_LIMIT
    limit = min(limit, settings.MAX_PAGE_LIMIT)

    offset = max(parse_int(params.get("offset"), 0), 0)

    return ListingFilters(
        search=_clean_text(params.get("search")),
        city=_clean_text(params.get("city")),
        district=_clean_text(params.get("district")),
        gender=_clean_text(params.get("gender")),
        limit=limit,
        offset=offset,
        **{name: parse_flag(params.get(name)) for name in (*TIER_FLAG_COLUMNS, "new", "online")},
    )


# -----------------------------
# クエリ組み立て
# -----------------------------

def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _search_condition(term: str):
    pattern = f"%{escape_like(term)}%"
    clauses = [
        Profile.name.ilike(pattern, escape="\\"),
        Profile.city.ilike(pattern, escape="\\"),
    ]
    aliases = resolve_city_alias(term)
    if aliases:
        clauses.append(Profile.city.in_(aliases))
    return or_(*clauses)


def _tier_active(column, now: datetime):
    return and_(column.isnot(None), column > now)


def build_query(filters: ListingFilters, now: datetime) -> ListingQuery:
    conditions = [
        Profile.role == LISTABLE_ROLE,
        _tier_active(Profile.public_expiry, now),
    ]

    if filters.search:
        conditions.append(_search_condition(filters.search))

    if filters.city and filters.city != ALL_VALUE:
        conditions.append(Profile.city == city_name(filters.city))

    if filters.district and filters.district != ALL_VALUE:
        conditions.append(Profile.district == filters.district)

    if filters.gender:
        conditions.append(Profile.gender == filters.gender)

    for flag, column_name in TIER_FLAG_COLUMNS.items():
        if getattr(filters, flag):
            conditions.append(_tier_active(getattr(Profile, column_name), now))

    if filters.new:
        conditions.append(Profile.created_at >= now - NEW_WINDOW)

    if filters.online:
        conditions.append(
            and_(Profile.last_active.isnot(None), Profile.last_active >= now - ONLINE_WINDOW)
        )

    mode = filters.ordering_mode()
    if mode is OrderingMode.UNFILTERED:
        order_by = [
            case((_tier_active(Profile.gold_expires_at, now), 1), else_=0).desc(),
            case((_tier_active(Profile.silver_expires_at, now), 1), else_=0).desc(),
            Profile.created_at.desc(),
        ]
    else:
        order_by = [Profile.created_at.desc()]
    # ページ境界で順序がぶれないように最後に id を入れておく
    order_by.append(Profile.id.asc())

    return ListingQuery(
        conditions=conditions,
        ordering_mode=mode,
        order_by=order_by,
        limit=filters.limit,
        offset=filters.offset,
    )


def run_query(db: Session, query: ListingQuery) -> tuple[int, list[Profile]]:
    """件数クエリ 1 回 + ページ取得クエリ 1 回"""
    base = db.query(Profile).filter(*query.conditions)
    total = base.count()
    rows = (
        base.order_by(*query.order_by)
        .limit(query.limit)
        .offset(query.offset)
        .all()
    )
    return total, rows


def paginate(total: int, limit: int, offset: int) -> dict[str, Any]:
    return {
        "total": total,
        "limit": limit,
        "offset": offset,
        "current_page": offset // limit + 1,
        "total_pages": math.ceil(total / limit),
        "has_next_page": offset + limit < total,
        "has_previous_page": offset > 0,
    }
