# app/api/v1/analytics.py

import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ...api.deps import get_db_dep
from ...logging_config import setup_logger
from ...models.analytics import ProfileInteraction, ProfileView
from ...models.profile import Profile
from ...schemas.analytics import TrackEventIn

logger = setup_logger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for") or request.headers.get("x-real-ip")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@router.post("")
def track_event(
    data: TrackEventIn,
    request: Request,
    db: Session = Depends(get_db_dep),
):
    """閲覧 / 問い合わせクリックを 1 件記録（追記のみ）"""
    if data.type == "interaction" and not data.interaction_type:
        raise HTTPException(status_code=400, detail="Interaction type is required")

    if not db.get(Profile, data.profile_id):
        raise HTTPException(status_code=404, detail="Profile not found")

    ip = client_ip(request)
    if data.type == "view":
        db.add(ProfileView(id=str(uuid.uuid4()), profile_id=data.profile_id, viewer_ip=ip))
    else:
        db.add(
            ProfileInteraction(
                id=str(uuid.uuid4()),
                profile_id=data.profile_id,
                type=data.interaction_type,
                interactor_ip=ip,
            )
        )
    db.commit()

    logger.debug(f"tracked {data.type} profile={data.profile_id} kind={data.interaction_type}")
    return {"success": True}
