# app/api/v1/admin.py

import re
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...api.deps import get_db_dep, require_admin
from ...db import utcnow
from ...logging_config import log_admin_action, setup_logger
from ...models.analytics import ProfileInteraction, ProfileView
from ...models.profile import Profile
from ...models.report import Report
from ...schemas.analytics import DashboardOut, ProfileAnalyticsOut
from ...schemas.profile import AdminUserOut, ProfileCreate, ProfileUpdate
from ...schemas.report import ReportOut, ReportUpdate
from ...services import analytics
from ...services.listing import LISTABLE_ROLE, escape_like, parse_int
from ...services.subscription import EXPIRY_FIELDS, evaluate

logger = setup_logger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


def _slugify(text: str) -> str:
    text = re.sub(r"[^a-z0-9\s-]", "", text.lower())
    return re.sub(r"[\s-]+", "-", text).strip("-")


def _generate_slug(name: Optional[str], city: str) -> str:
    """例: natalia-tbilisi-8x4k2c9a"""
    parts = [_slugify(name or ""), _slugify(city), uuid.uuid4().hex[:8]]
    return "-".join(p for p in parts if p)


def _to_admin_out(profile: Profile, now) -> AdminUserOut:
    return AdminUserOut.model_validate(
        {
            **{c.name: getattr(profile, c.name) for c in Profile.__table__.columns},
            **evaluate(profile, now),
        }
    )


def _get_profile_or_404(db: Session, profile_id: str) -> Profile:
    profile = db.get(Profile, profile_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


# -----------------------------
# ユーザー（プロフィール）管理
# -----------------------------

@router.get("/users", response_model=list[AdminUserOut])
def list_users(
    q: Optional[str] = None,
    db: Session = Depends(get_db_dep),
):
    query = db.query(Profile)
    if q and q.strip():
        pattern = f"%{escape_like(q.strip())}%"
        query = query.filter(
            Profile.name.ilike(pattern, escape="\\") | Profile.email.ilike(pattern, escape="\\")
        )

    now = utcnow()
    return [_to_admin_out(p, now) for p in query.order_by(Profile.created_at.desc()).all()]


@router.post("/users", response_model=AdminUserOut, status_code=201)
def create_user(
    data: ProfileCreate,
    db: Session = Depends(get_db_dep),
):
    if db.query(Profile).filter(Profile.email == data.email).first():
        raise HTTPException(status_code=409, detail="Email already registered")

    values = data.model_dump()
    values["slug"] = data.slug or _generate_slug(data.name, data.city)

    profile = Profile(id=str(uuid.uuid4()), **values)
    db.add(profile)
    db.commit()
    db.refresh(profile)

    log_admin_action(logger, "create_user", {"id": profile.id, "email": profile.email})
    return _to_admin_out(profile, utcnow())


@router.patch("/users/{profile_id}", response_model=AdminUserOut)
def update_user(
    profile_id: str,
    data: ProfileUpdate,
    db: Session = Depends(get_db_dep),
):
    """
    送られたキーだけ反映する。
    期限系は null で解除できるが、それ以外の null は無視する。
    """
    profile = _get_profile_or_404(db, profile_id)

    updates = {
        key: value
        for key, value in data.model_dump(exclude_unset=True).items()
        if value is not None or key in EXPIRY_FIELDS
    }
    if not updates:
        raise HTTPException(status_code=400, detail="No valid fields to update")

    for key, value in updates.items():
        setattr(profile, key, value)
    profile.updated_at = utcnow()
    db.add(profile)
    db.commit()
    db.refresh(profile)

    log_admin_action(logger, "update_user", {"id": profile.id, "fields": sorted(updates)})
    return _to_admin_out(profile, utcnow())


@router.delete("/users/{profile_id}", status_code=204)
def delete_user(
    profile_id: str,
    db: Session = Depends(get_db_dep),
):
    """物理削除。閲覧・クリック履歴は一緒に消え、通報は profile_id が NULL になって残る"""
    profile = _get_profile_or_404(db, profile_id)
    db.delete(profile)
    db.commit()

    log_admin_action(logger, "delete_user", {"id": profile_id})
    return


# -----------------------------
# 集計
# -----------------------------

def _load_events(db: Session, since):
    views_q = db.query(ProfileView)
    interactions_q = db.query(ProfileInteraction)
    if since is not None:
        views_q = views_q.filter(ProfileView.viewed_at >= since)
        interactions_q = interactions_q.filter(ProfileInteraction.interacted_at >= since)
    views = views_q.order_by(ProfileView.viewed_at.desc()).all()
    interactions = interactions_q.order_by(ProfileInteraction.interacted_at.desc()).all()
    return views, interactions


@router.get("/analytics", response_model=DashboardOut)
def dashboard(
    time_range: Optional[str] = None,
    q: Optional[str] = None,
    db: Session = Depends(get_db_dep),
):
    now = utcnow()
    time_range = time_range if time_range in analytics.TIME_RANGES else "all"

    views, interactions = _load_events(db, analytics.range_start(time_range, now))
    profiles = db.query(Profile).filter(Profile.role == LISTABLE_ROLE).all()

    return analytics.aggregate(views, interactions, profiles, time_range, now, search=q)


@router.get("/analytics/{profile_id}", response_model=ProfileAnalyticsOut)
def profile_analytics(
    profile_id: str,
    db: Session = Depends(get_db_dep),
):
    profile = _get_profile_or_404(db, profile_id)

    views = db.query(ProfileView).filter(ProfileView.profile_id == profile_id).all()
    interactions = (
        db.query(ProfileInteraction)
        .filter(ProfileInteraction.profile_id == profile_id)
        .all()
    )
    return analytics.profile_detail(profile, views, interactions, utcnow())


# -----------------------------
# 通報の管理
# -----------------------------

@router.get("/reports", response_model=list[ReportOut])
def list_reports(
    status: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    db: Session = Depends(get_db_dep),
):
    n = parse_int(limit, 50)
    if n <= 0:
        n = 50
    skip = max(parse_int(offset, 0), 0)

    query = db.query(Report)
    if status:
        query = query.filter(Report.status == status)
    return (
        query.order_by(Report.created_at.desc(), Report.id.asc())
        .limit(n)
        .offset(skip)
        .all()
    )


@router.patch("/reports/{report_id}", response_model=ReportOut)
def update_report(
    report_id: str,
    data: ReportUpdate,
    db: Session = Depends(get_db_dep),
):
    report = db.get(Report, report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")

    report.status = data.status
    report.admin_notes = data.admin_notes or None
    report.updated_at = utcnow()
    db.add(report)
    db.commit()
    db.refresh(report)

    log_admin_action(logger, "update_report", {"id": report.id, "status": report.status})
    return report
