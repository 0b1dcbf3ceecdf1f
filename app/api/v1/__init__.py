# app/api/v1/__init__.py

from fastapi import APIRouter

from . import escorts, analytics, reports, admin

api_router = APIRouter()

# それぞれの router 側で prefix を持っている前提にする
api_router.include_router(escorts.router)    # prefix="/escorts"
api_router.include_router(analytics.router)  # prefix="/analytics"
api_router.include_router(reports.router)    # prefix="/reports"
api_router.include_router(admin.router)      # prefix="/admin"
