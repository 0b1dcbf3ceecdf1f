# app/services/analytics.py
"""
管理画面向けの集計（閲覧数・問い合わせクリック数）。

取得済みのイベント列・プロフィール列だけを受け取る純粋な関数群で、
イベントが 0 件でも例外は出さずにすべて 0 に倒す。
"""
from collections import Counter
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Iterable, Optional

from .subscription import is_active

TIME_RANGES = ("today", "week", "month", "all")
TOP_N = 5

WEEK = timedelta(days=7)
MONTH = timedelta(days=30)


def start_of_day(now: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    now（naive UTC）が属する日の 0 時を naive UTC で返す。
    日付の区切りはサーバーのローカル時刻（tz 指定時はそのタイムゾーン）。
    """
    local = now.replace(tzinfo=timezone.utc).astimezone(tz)
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc).replace(tzinfo=None)


def range_start(time_range: str, now: datetime, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """期間指定 → 下限日時。'all' や未知の値は None（全期間）"""
    if time_range == "today":
        return start_of_day(now, tz)
    if time_range == "week":
        return now - WEEK
    if time_range == "month":
        return now - MONTH
    return None


def event_time(event) -> datetime:
    return getattr(event, "viewed_at", None) or getattr(event, "interacted_at")


def filter_since(events: Iterable, since: Optional[datetime]) -> list:
    if since is None:
        return list(events)
    return [e for e in events if event_time(e) >= since]


def percentage(part: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(part / total * 100, 1)


def interaction_rate(interactions: int, views: int) -> str:
    """閲覧に対する問い合わせの割合。閲覧 0 件なら '0%'"""
    if views == 0:
        return "0%"
    return f"{interactions / views * 100:.1f}%"


def interaction_breakdown(interactions: list) -> list[dict]:
    counts = Counter(i.type or "unknown" for i in interactions)
    total = sum(counts.values())
    return [
        {"type": type_, "count": count, "percentage": percentage(count, total)}
        for type_, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    ]


def profile_rollup(views: list, interactions: list, profiles: list, now: datetime) -> list[dict]:
    """プロフィールごとの閲覧数・問い合わせ数（イベントは 1 回ずつ走査して dict に積む）"""
    view_counts = Counter(v.profile_id for v in views)
    interaction_counts = Counter(i.profile_id for i in interactions)

    rows = []
    for p in profiles:
        n_views = view_counts.get(p.id, 0)
        n_interactions = interaction_counts.get(p.id, 0)
        rows.append(
            {
                "id": p.id,
                "name": p.name,
                "email": p.email,
                "slug": p.slug,
                "is_public": is_active(p.public_expiry, now),
                "views": n_views,
                "interactions": n_interactions,
                "interaction_rate": interaction_rate(n_interactions, n_views),
            }
        )
    return rows


def top_profiles(rollup: list[dict], n: int = TOP_N) -> list[dict]:
    return sorted(rollup, key=lambda r: r["views"], reverse=True)[:n]


def filter_rollup(rollup: list[dict], term: Optional[str]) -> list[dict]:
    """名前 / メールアドレスの部分一致（大文字小文字無視）"""
    if not term or not term.strip():
        return rollup
    needle = term.strip().casefold()
    return [
        r
        for r in rollup
        if needle in (r.get("name") or "").casefold()
        or needle in (r.get("email") or "").casefold()
    ]


def aggregate(
    views: Iterable,
    interactions: Iterable,
    profiles: Iterable,
    time_range: str,
    now: datetime,
    search: Optional[str] = None,
    tz: Optional[tzinfo] = None,
) -> dict:
    since = range_start(time_range, now, tz)
    views = filter_since(views, since)
    interactions = filter_since(interactions, since)
    profiles = list(profiles)

    rollup = profile_rollup(views, interactions, profiles, now)

    return {
        "time_range": time_range if time_range in TIME_RANGES else "all",
        "total_views": len(views),
        "total_interactions": len(interactions),
        "total_profiles": len(profiles),
        "public_profiles": sum(1 for r in rollup if r["is_public"]),
        "interaction_breakdown": interaction_breakdown(interactions),
        "top_profiles": top_profiles(rollup),
        "profiles": filter_rollup(rollup, search),
    }


def profile_detail(
    profile,
    views: Iterable,
    interactions: Iterable,
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> dict:
    """
    1 プロフィール分のドリルダウン。
    today / week / month / total は累積の窓なので、今日のイベントは 4 つすべてに数える。
    """
    views = [v for v in views if v.profile_id == profile.id]
    interactions = [i for i in interactions if i.profile_id == profile.id]

    today = start_of_day(now, tz)
    week = now - WEEK
    month = now - MONTH

    matrix: dict[str, dict[str, int]] = {}
    for i in interactions:
        cell = matrix.setdefault(i.type or "unknown", {"today": 0, "week": 0, "month": 0, "total": 0})
        at = i.interacted_at
        cell["total"] += 1
        if at >= month:
            cell["month"] += 1
        if at >= week:
            cell["week"] += 1
        if at >= today:
            cell["today"] += 1

    return {
        "profile_id": profile.id,
        "name": profile.name,
        "email": profile.email,
        "total_views": len(views),
        "total_interactions": len(interactions),
        "interaction_rate": interaction_rate(len(interactions), len(views)),
        "matrix": matrix,
    }
