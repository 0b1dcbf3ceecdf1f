# app/config.py
"""環境変数ベースの設定。未設定・不正値のときはローカル開発用の既定値を使う。"""
import os


def _int_env(name: str, default: int) -> int:
    """正の整数だけ受け付ける（0 以下・数値以外は既定値）"""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


class Settings:
    def __init__(self) -> None:
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./directory.db")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        # 管理 API 用の共有トークン（本番では必ず上書きする）
        self.ADMIN_TOKEN = os.getenv("ADMIN_TOKEN", "dev-admin-token")
        self.DEFAULT_PAGE_LIMIT = _int_env("DEFAULT_PAGE_LIMIT", 20)
        self.MAX_PAGE_LIMIT = _int_env("MAX_PAGE_LIMIT", 100)
        self.PRESENCE_POLL_SECONDS = _int_env("PRESENCE_POLL_SECONDS", 60)


settings = Settings()
