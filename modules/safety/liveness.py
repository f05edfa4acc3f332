# modules/safety/liveness.py
"""
Liveness tracker.

- Remember, per watched address, when it last answered a probe.
- Answer how stale an address is at a given time.

API:
- LivenessTracker(addresses)
- record(address, timestamp)
- staleness(address, now) -> float seconds (inf if never seen)
"""

import math
from typing import Dict, Iterable, Optional

import numpy as np

from core.utils import get_logger

logger = get_logger("liveness")


class LivenessTracker:
    def __init__(self, addresses: Iterable[str]):
        self._slots: Dict[str, int] = {}
        for addr in addresses:
            self._slots.setdefault(addr, len(self._slots))
        # NaN until the first successful observation
        self._last_seen = np.full(len(self._slots), np.nan, dtype=np.float64)

    def __contains__(self, address: str) -> bool:
        return address in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def record(self, address: str, timestamp: float):
        slot = self._slots.get(address)
        if slot is None:
            logger.debug("Ignoring observation for unknown address %s", address)
            return
        current = self._last_seen[slot]
        if np.isnan(current) or timestamp > current:
            self._last_seen[slot] = timestamp

    def last_seen(self, address: str) -> Optional[float]:
        slot = self._slots.get(address)
        if slot is None or np.isnan(self._last_seen[slot]):
            return None
        return float(self._last_seen[slot])

    def staleness(self, address: str, now: float) -> float:
        seen = self.last_seen(address)
        if seen is None:
            return math.inf
        return now - seen
