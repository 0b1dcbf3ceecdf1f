# tests/test_presence.py

import time
from datetime import datetime, timedelta

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.services.presence import PresencePoller, humanize_seconds, presence

NOW = datetime(2026, 5, 10, 12, 0, 0)


def _ago(**kwargs) -> datetime:
    return NOW - timedelta(**kwargs)


def test_unknown_when_last_active_missing():
    assert presence(None, NOW) == {"is_online": None, "label": None}


def test_online_up_to_thirty_seconds():
    assert presence(NOW, NOW) == {"is_online": True, "label": "online"}
    assert presence(_ago(seconds=30), NOW) == {"is_online": True, "label": "online"}


def test_forty_five_seconds_is_last_seen_in_seconds():
    state = presence(_ago(seconds=45), NOW)
    assert state["is_online"] is False
    assert state["label"] == "last seen 45 seconds ago"


def test_largest_unit_only_with_floor_division():
    assert presence(_ago(seconds=90), NOW)["label"] == "last seen 1 minute ago"
    assert presence(_ago(minutes=59, seconds=59), NOW)["label"] == "last seen 59 minutes ago"
    assert presence(_ago(hours=2, minutes=5), NOW)["label"] == "last seen 2 hours ago"
    assert presence(_ago(days=3, hours=23), NOW)["label"] == "last seen 3 days ago"


def test_humanize_thresholds():
    assert humanize_seconds(59) == "59 seconds"
    assert humanize_seconds(60) == "1 minute"
    assert humanize_seconds(3600) == "1 hour"
    assert humanize_seconds(86400) == "1 day"


# -----------------------------
# PresencePoller
# -----------------------------

def test_poller_tick_derives_presence_for_fetched_ids():
    updates = []
    calls = []

    def fetch(ids):
        calls.append(list(ids))
        return {"a": _ago(seconds=10), "b": _ago(minutes=5)}

    poller = PresencePoller(["a", "b", "c"], fetch, updates.append, interval=60, clock=lambda: NOW)
    states = poller.tick()

    assert calls == [["a", "b", "c"]]
    assert states["a"]["is_online"] is True
    assert states["b"]["label"] == "last seen 5 minutes ago"
    # 取得結果に無い ID は含めない
    assert "c" not in states
    assert updates == [states]


def test_poller_keeps_previous_values_when_fetch_fails():
    results = [{"a": _ago(seconds=10)}]

    def fetch(ids):
        if results:
            return results.pop()
        raise ConnectionError("network down")

    now = {"value": NOW}
    poller = PresencePoller(["a"], fetch, lambda s: None, clock=lambda: now["value"])

    first = poller.tick()
    assert first["a"]["is_online"] is True

    # 2 回目は失敗。前回の last_active から再計算だけ行う
    now["value"] = NOW + timedelta(minutes=2)
    second = poller.tick()
    assert second["a"]["is_online"] is False
    assert second["a"]["label"] == "last seen 2 minutes ago"


def test_poller_start_and_cancel_lifecycle():
    ticks = []
    poller = PresencePoller(["a"], lambda ids: {}, ticks.append, interval=3600, clock=lambda: NOW)

    poller.start()
    assert len(ticks) == 1
    assert poller.running is True

    poller.cancel()
    assert poller.running is False


def test_poller_second_start_does_not_leak_a_timer():
    ticks = []
    poller = PresencePoller(["a"], lambda ids: {}, ticks.append, interval=0.2, clock=lambda: NOW)

    poller.start()
    poller.start()
    assert len(ticks) == 1

    poller.cancel()
    time.sleep(0.6)
    # cancel 後は 1 回も tick しない
    assert len(ticks) == 1


def test_poller_keeps_ticking_until_cancelled():
    ticks = []
    poller = PresencePoller(["a"], lambda ids: {}, ticks.append, interval=0.05, clock=lambda: NOW)

    poller.start()
    time.sleep(0.3)
    poller.cancel()
    seen = len(ticks)
    assert seen >= 2

    time.sleep(0.2)
    assert len(ticks) == seen


# -----------------------------
# POST /api/escorts/status
# -----------------------------

def test_bulk_status_returns_exactly_requested_known_ids(
    client: TestClient, db: Session, add_profile
):
    a = add_profile("A", last_active_ago=timedelta(minutes=3))
    b = add_profile("B", last_active_ago=None)
    add_profile("C")
    db.refresh(b)
    assert b.last_active is None

    res = client.post("/api/escorts/status", json={"profile_ids": [a.id, b.id, "missing"]})
    assert res.status_code == 200

    statuses = res.json()["statuses"]
    assert set(statuses) == {a.id, b.id}
    assert statuses[b.id] is None
    assert statuses[a.id] is not None


def test_bulk_status_with_empty_list(client: TestClient, db: Session):
    res = client.post("/api/escorts/status", json={"profile_ids": []})
    assert res.status_code == 200
    assert res.json() == {"statuses": {}}
