# tests/test_subscription.py

from datetime import datetime, timedelta
from types import SimpleNamespace

from app.services.subscription import evaluate, is_active

NOW = datetime(2026, 5, 10, 12, 0, 0)


def _profile(**expiries):
    base = {
        "public_expiry": None,
        "gold_expires_at": None,
        "silver_expires_at": None,
        "featured_expires_at": None,
        "verified_photos_expiry": None,
    }
    base.update(expiries)
    return SimpleNamespace(**base)


def test_all_null_expiries_yield_no_flags():
    flags = evaluate(_profile(), NOW)
    assert flags == {
        "is_public": False,
        "is_gold": False,
        "is_silver": False,
        "is_featured": False,
        "is_verified_photos": False,
    }


def test_future_expiry_is_active_and_past_is_not():
    flags = evaluate(
        _profile(
            public_expiry=NOW + timedelta(days=10),
            gold_expires_at=NOW + timedelta(days=1),
            silver_expires_at=NOW - timedelta(seconds=1),
        ),
        NOW,
    )
    assert flags["is_public"] is True
    assert flags["is_gold"] is True
    assert flags["is_silver"] is False


def test_expiry_equal_to_now_counts_as_expired():
    """境界: expiry == now は期限切れ"""
    assert is_active(NOW, NOW) is False
    assert evaluate(_profile(gold_expires_at=NOW), NOW)["is_gold"] is False


def test_tiers_are_independent_and_stackable():
    """gold / featured / verified は同時に有効になれる"""
    later = NOW + timedelta(days=3)
    flags = evaluate(
        _profile(
            gold_expires_at=later,
            featured_expires_at=later,
            verified_photos_expiry=later,
        ),
        NOW,
    )
    assert flags["is_gold"] and flags["is_featured"] and flags["is_verified_photos"]
    assert flags["is_silver"] is False


def test_tier_expires_monotonically_with_time():
    """T1 < gold期限 < T2 なら T1 では有効、T2 では無効"""
    p = _profile(gold_expires_at=NOW + timedelta(hours=1))
    assert evaluate(p, NOW)["is_gold"] is True
    assert evaluate(p, NOW + timedelta(hours=2))["is_gold"] is False
