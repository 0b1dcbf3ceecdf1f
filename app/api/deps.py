# app/api/deps.py

from collections.abc import Generator
from typing import Optional

from fastapi import Header, HTTPException
from sqlalchemy.orm import Session

from app.config import settings
from app.db import SessionLocal


def get_db_dep() -> Generator[Session, None, None]:
    """
    FastAPI の Depends で使う DB セッション依存関数。
    エンドポイント側では `db: Session = Depends(get_db_dep)` で利用。
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def require_admin(x_admin_token: Optional[str] = Header(default=None)) -> None:
    """
    管理 API 用のガード。ログイン/セッション管理は外部に任せ、
    ここでは共有トークン（X-Admin-Token ヘッダ）だけを確認する。
    """
    if not x_admin_token or x_admin_token != settings.ADMIN_TOKEN:
        raise HTTPException(status_code=401, detail="Unauthorized")


get_db = get_db_dep
