# app/services/subscription.py
"""
ティア（gold / silver / featured / verified photos）と公開状態の判定。

状態はすべて期限カラムから毎回導出する。boolean をキャッシュ・保存すると
期限切れ後も gold 表示が残るので、レスポンスを組み立てるたびに evaluate() を呼ぶこと。
"""
from datetime import datetime
from typing import Optional

# フラグ名 → Profile の期限カラム名
TIER_COLUMNS = {
    "is_public": "public_expiry",
    "is_gold": "gold_expires_at",
    "is_silver": "silver_expires_at",
    "is_featured": "featured_expires_at",
    "is_verified_photos": "verified_photos_expiry",
}

EXPIRY_FIELDS = tuple(TIER_COLUMNS.values())


def is_active(expiry: Optional[datetime], now: datetime) -> bool:
    """期限が存在し、かつ now より厳密に後なら有効（now と同時刻は期限切れ扱い）"""
    return expiry is not None and expiry > now


def evaluate(profile, now: datetime) -> dict[str, bool]:
    """
    プロフィール 1 件のティア状態を返す。
    ティア同士は独立していて、gold かつ featured かつ verified もありうる。
    """
    return {
        flag: is_active(getattr(profile, column, None), now)
        for flag, column in TIER_COLUMNS.items()
    }
