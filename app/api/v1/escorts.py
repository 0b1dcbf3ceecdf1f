# app/api/v1/escorts.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...api.deps import get_db_dep
from ...db import utcnow
from ...logging_config import setup_logger
from ...models.profile import Profile
from ...schemas.listing import EscortListOut, StatusOut, StatusRequest
from ...schemas.profile import EscortOut
from ...services import listing
from ...services.presence import presence
from ...services.subscription import evaluate

logger = setup_logger(__name__)

router = APIRouter(prefix="/escorts", tags=["escorts"])


def to_escort_out(profile: Profile, now) -> EscortOut:
    """ORM 行 → レスポンス。ティアとオンライン表示はここで毎回計算する。"""
    return EscortOut(
        id=profile.id,
        slug=profile.slug,
        name=profile.name,
        city=profile.city,
        district=profile.district,
        gender=profile.gender,
        about=profile.about,
        phone=profile.phone,
        whatsapp_available=bool(profile.whatsapp_available),
        viber_available=bool(profile.viber_available),
        last_active=profile.last_active,
        created_at=profile.created_at,
        presence=presence(profile.last_active, now),
        **evaluate(profile, now),
    )


@router.get("", response_model=EscortListOut)
def list_escorts(
    search: Optional[str] = None,
    city: Optional[str] = None,
    district: Optional[str] = None,
    gender: Optional[str] = None,
    gold: Optional[str] = None,
    silver: Optional[str] = None,
    featured: Optional[str] = None,
    verified_photos: Optional[str] = None,
    new: Optional[str] = None,
    online: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    db: Session = Depends(get_db_dep),
):
    """
    公開中の escort 一覧。
    数値・真偽値は文字列で受けて自前でパースする（不正値は既定値にする）。
    """
    filters = listing.parse_filters(
        {
            "search": search,
            "city": city,
            "district": district,
            "gender": gender,
            "gold": gold,
            "silver": silver,
            "featured": featured,
            "verified_photos": verified_photos,
            "new": new,
            "online": online,
            "limit": limit,
            "offset": offset,
        }
    )
    now = utcnow()
    query = listing.build_query(filters, now)
    logger.debug(f"listing filters={filters.echo()} mode={query.ordering_mode.value}")

    total, rows = listing.run_query(db, query)

    return {
        "items": [to_escort_out(p, now) for p in rows],
        "pagination": listing.paginate(total, query.limit, query.offset),
        "meta": {
            "timestamp": now,
            "ordering": query.ordering_mode.value,
            "filters": filters.echo(),
        },
    }


@router.post("/status", response_model=StatusOut)
def bulk_status(
    data: StatusRequest,
    db: Session = Depends(get_db_dep),
):
    """指定 ID 分の last_active をまとめて返す（未知の ID は含めない）"""
    if not data.profile_ids:
        return {"statuses": {}}

    rows = (
        db.query(Profile.id, Profile.last_active)
        .filter(Profile.id.in_(set(data.profile_ids)))
        .all()
    )
    return {"statuses": {pid: last_active for pid, last_active in rows}}


@router.get("/{profile_id}", response_model=EscortOut)
def get_escort(
    profile_id: str,
    db: Session = Depends(get_db_dep),
):
    profile = db.get(Profile, profile_id)
    if not profile or profile.role != listing.LISTABLE_ROLE:
        raise HTTPException(status_code=404, detail="Profile not found")

    return to_escort_out(profile, utcnow())
