from fastapi import FastAPI

from .db import Base, engine
from . import models  # noqa: F401
from .api.v1 import api_router as api_v1_router
from .logging_config import setup_logger

logger = setup_logger("app")

# モデルからテーブル作成（開発用）
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Escort Directory API",
    version="0.1.0",
)

app.include_router(api_v1_router, prefix="/api")


@app.get("/")
def read_root():
    return {"message": "Escort Directory API is running"}
