# tests/conftest.py
import os
import uuid
from datetime import timedelta

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_directory.db")

import pytest
from sqlalchemy.orm import Session
from fastapi.testclient import TestClient

from app.config import settings
from app.db import Base, engine, SessionLocal, utcnow
from app.main import app
from app.models.profile import Profile


@pytest.fixture(scope="function")
def db() -> Session:
    """
    テストごとにクリーンな DB を用意するフィクスチャ。
    アプリ本体と同じ engine を使う。
    """
    # 既存テーブルを全部削除してから、再作成
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client() -> TestClient:
    """
    通常の FastAPI app をそのまま使う TestClient。
    DI の上書きは行わない。
    """
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers() -> dict:
    return {"X-Admin-Token": settings.ADMIN_TOKEN}


@pytest.fixture
def add_profile(db: Session):
    """
    Profile を直接 DB に入れるヘルパー。
    既定では「公開中・ティアなし」の escort を作る。
    """

    def _add(
        name: str = "Nino",
        *,
        city: str = "Tbilisi",
        gender: str = "female",
        role: str = "escort",
        public: bool = True,
        created_ago: timedelta = timedelta(days=60),
        last_active_ago: timedelta | None = timedelta(hours=1),
        **expiries,
    ) -> Profile:
        now = utcnow()
        pid = str(uuid.uuid4())
        values = {
            "public_expiry": now + timedelta(days=10) if public else None,
        }
        values.update(expiries)
        p = Profile(
            id=pid,
            role=role,
            email=f"{pid}@example.com",
            slug=f"{name.lower()}-{pid[:8]}",
            name=name,
            phone="+995555000000",
            city=city,
            gender=gender,
            created_at=now - created_ago,
            last_active=None if last_active_ago is None else now - last_active_ago,
            **values,
        )
        db.add(p)
        db.commit()
        if last_active_ago is None:
            # INSERT 時は None でもカラム既定値（utcnow）が入るので、UPDATE で NULL に戻す
            p.last_active = None
            db.commit()
        return p

    return _add
