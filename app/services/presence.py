# app/services/presence.py
"""
オンライン表示（online / last seen ...）の導出と、定期ポーリング。

表示は last_active から毎回計算するだけで、保存はしない。
"""
import threading
from datetime import datetime
from typing import Callable, Iterable, Mapping, Optional

from ..config import settings
from ..db import utcnow
from ..logging_config import setup_logger

logger = setup_logger(__name__)

ONLINE_THRESHOLD_SECONDS = 30
ONLINE_LABEL = "online"

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR


def _unit(n: int, singular: str) -> str:
    return f"{n} {singular}" if n == 1 else f"{n} {singular}s"


def humanize_seconds(seconds: int) -> str:
    """最も大きい単位だけで表す（'1 hour 5 minutes' のような複合表記はしない）"""
    if seconds < MINUTE:
        return _unit(seconds, "second")
    if seconds < HOUR:
        return _unit(seconds // MINUTE, "minute")
    if seconds < DAY:
        return _unit(seconds // HOUR, "hour")
    return _unit(seconds // DAY, "day")


def presence(last_active: Optional[datetime], now: datetime) -> dict:
    """
    {"is_online": bool | None, "label": str | None}
    last_active が無い場合は不明扱い（is_online=None, label=None）。
    """
    if last_active is None:
        return {"is_online": None, "label": None}

    elapsed = (now - last_active).total_seconds()
    # 未来の last_active（時計ずれ）はオンライン扱い
    if elapsed <= ONLINE_THRESHOLD_SECONDS:
        return {"is_online": True, "label": ONLINE_LABEL}

    return {"is_online": False, "label": f"last seen {humanize_seconds(int(elapsed))} ago"}


class PresencePoller:
    """
    一覧カードのオンライン表示を定期的に更新するタスク。

    fetch(profile_ids) は {id: last_active} を返す一括取得関数
    （POST /api/escorts/status と同じ形）。取得に失敗した回は何もせず、
    前回の表示をそのまま残す。画面を閉じるときは cancel() を呼ぶ。
    """

    def __init__(
        self,
        profile_ids: Iterable[str],
        fetch: Callable[[list[str]], Mapping[str, Optional[datetime]]],
        on_update: Callable[[dict[str, dict]], None],
        interval: Optional[float] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.profile_ids = list(profile_ids)
        self.fetch = fetch
        self.on_update = on_update
        self.interval = interval if interval is not None else settings.PRESENCE_POLL_SECONDS
        self.clock = clock or utcnow
        self.last_seen: dict[str, Optional[datetime]] = {}
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._cancelled = False
        self._started = False

    def tick(self) -> dict[str, dict]:
        """1 回分の取得と再計算。失敗時は前回値から再計算する。"""
        try:
            fetched = self.fetch(self.profile_ids)
        except Exception as exc:
            logger.warning(f"presence poll failed: {exc}")
        else:
            self.last_seen = {pid: fetched.get(pid) for pid in self.profile_ids if pid in fetched}

        now = self.clock()
        states = {pid: presence(ts, now) for pid, ts in self.last_seen.items()}
        self.on_update(states)
        return states

    def _run(self) -> None:
        if self._cancelled:
            return
        self.tick()
        self._schedule()

    def _schedule(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._timer = threading.Timer(self.interval, self._run)
            self._timer.daemon = True
            self._timer.start()

    def start(self) -> None:
        """マウント時: すぐに 1 回取得してから定期実行を開始。実行中なら何もしない"""
        with self._lock:
            if self._started and not self._cancelled:
                return
            self._started = True
            self._cancelled = False
        self.tick()
        self._schedule()

    def cancel(self) -> None:
        """アンマウント時: 以降の tick を止める"""
        with self._lock:
            self._cancelled = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def running(self) -> bool:
        return self._started and not self._cancelled
