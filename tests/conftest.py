"""Shared fixtures for the watchdog tests."""

import logging
from typing import List

import pytest

from core.hosts import Host, Role
from modules.safety.liveness import LivenessTracker
from modules.safety.neighbour_watch import NeighbourWatch
from modules.safety.quorum import QuorumEvaluator

NEIGHBOUR = Host("pine2", "10.0.0.2", Role.NEIGHBOUR)
UNIVERSE = ["10.0.0.1", "10.0.0.2", "10.0.0.3", "10.0.0.4", "10.0.0.5"]


class RecordingActuator:
    def __init__(self, fail: Exception = None):
        self.calls = []
        self.fail = fail

    async def reset(self, peer: str) -> None:
        self.calls.append(peer)
        if self.fail is not None:
            raise self.fail


@pytest.fixture
def neighbour() -> Host:
    return NEIGHBOUR


@pytest.fixture
def universe() -> List[str]:
    return list(UNIVERSE)


@pytest.fixture
def tracker() -> LivenessTracker:
    return LivenessTracker([NEIGHBOUR.address] + UNIVERSE)


@pytest.fixture
def evaluator(tracker: LivenessTracker) -> QuorumEvaluator:
    return QuorumEvaluator(tracker, NEIGHBOUR.address, UNIVERSE)


@pytest.fixture
def actuator() -> RecordingActuator:
    return RecordingActuator()


@pytest.fixture
def make_watch(tracker, evaluator, actuator):
    def _make(dry_run: bool = False, timeout: float = 600, act=None) -> NeighbourWatch:
        return NeighbourWatch(NEIGHBOUR, tracker, evaluator, act or actuator,
                              timeout=timeout, dry_run=dry_run)
    return _make


@pytest.fixture
def watch_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.DEBUG, logger="watch")
    return caplog
