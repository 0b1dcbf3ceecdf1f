# app/api/v1/reports.py

import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ...api.deps import get_db_dep
from ...logging_config import setup_logger
from ...models.profile import Profile
from ...models.report import Report
from ...schemas.report import ReportCreate, ReportCreated
from .analytics import client_ip

logger = setup_logger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("", response_model=ReportCreated, status_code=201)
def create_report(
    data: ReportCreate,
    request: Request,
    db: Session = Depends(get_db_dep),
):
    """通報の受付。状態は常に pending から始まる"""
    if data.profile_id and not db.get(Profile, data.profile_id):
        raise HTTPException(status_code=404, detail="Profile not found")

    report = Report(
        id=str(uuid.uuid4()),
        profile_id=data.profile_id or None,
        profile_url=data.profile_url or None,
        reason=data.reason,
        description=data.description or None,
        reporter_name=data.reporter_name or None,
        reporter_email=data.reporter_email or None,
        reporter_ip=client_ip(request),
        status="pending",
    )
    db.add(report)
    db.commit()

    logger.info(f"report {report.id} created reason={report.reason} profile={report.profile_id}")
    return {"message": "Report submitted successfully", "report_id": report.id}
