# modules/safety/quorum.py
"""
Quorum evaluation.

Derives the two booleans the watchdog runs on from a LivenessTracker:
- universe_alive: at least `quorum` universe members answered within `window`
  seconds, i.e. our own connectivity can be trusted.
- neighbour_alive: the neighbour answered within `timeout` seconds.

Both are pure functions of `now` and the tracker; nothing is cached here.
"""

from typing import Iterable

import numpy as np

import config
from modules.safety.liveness import LivenessTracker


class QuorumEvaluator:
    def __init__(self, tracker: LivenessTracker, neighbour: str, universe: Iterable[str],
                 window: float = config.WATCHDOG["universe_window"],
                 quorum: int = config.WATCHDOG["quorum"]):
        self.tracker = tracker
        self.neighbour = neighbour
        self.universe = tuple(dict.fromkeys(universe))
        self.window = float(window)
        self.quorum = int(quorum)

    def reachable_members(self, now: float) -> int:
        staleness = np.array([self.tracker.staleness(addr, now) for addr in self.universe], dtype=np.float64)
        return int(np.count_nonzero(staleness < self.window))

    def universe_alive(self, now: float) -> bool:
        return self.reachable_members(now) >= self.quorum

    def neighbour_alive(self, now: float, timeout: float = config.WATCHDOG["timeout"]) -> bool:
        # equality at the boundary counts as stale
        return self.tracker.staleness(self.neighbour, now) < timeout
