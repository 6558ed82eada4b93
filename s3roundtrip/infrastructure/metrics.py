from __future__ import annotations

from collections import defaultdict
from time import time


class MetricsStore:
    def __init__(self) -> None:
        self._counters: dict[str, int] = defaultdict(int)
        self._started_ts: int = int(time())
        self._last_update_ts: int = self._started_ts

    def incr(self, key: str, value: int = 1) -> None:
        self._counters[key] += value
        self._last_update_ts = int(time())

    def get(self, key: str) -> int:
        return self._counters.get(key, 0)

    def snapshot(self) -> dict[str, int]:
        merged: dict[str, int] = dict(self._counters)
        merged["run_started_ts"] = self._started_ts
        merged["metrics_last_update_ts"] = self._last_update_ts
        return merged
