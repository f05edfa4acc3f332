# modules/safety/neighbour_watch.py
"""
Neighbour watchdog.

- Decide, once per tick, whether the neighbour has to be reset.
- Only reset a neighbour we have seen alive while our own view of the
  universe was trusted, and only while that view is still trusted.

States:
  LOST_UNIVERSE  fewer than `quorum` universe members reachable (initial)
  IDLE           universe reachable, neighbour not (yet) supervised
  ARMED          universe reachable, neighbour seen alive, supervising

The reset fires on the ARMED -> IDLE edge only, once per edge. Losing the
universe from any state drops to LOST_UNIVERSE without any action.

API:
- transition(state, universe_alive, neighbour_alive) -> (state, Optional[Action])
- WatchdogStateMachine().step(universe_alive, neighbour_alive) -> Optional[Action]
- NeighbourWatch(neighbour, tracker, evaluator, actuator, timeout, dry_run)
    - drain(queue) -> int
    - async tick(now) -> Optional[Action]
"""

import asyncio
from enum import Enum
from typing import Optional, Tuple

import config
from core.actuator import ActuationError, DryRunActuator
from core.hosts import Host
from core.utils import get_logger
from modules.safety.liveness import LivenessTracker
from modules.safety.quorum import QuorumEvaluator

logger = get_logger("neighbour_watch")


class WatchdogState(Enum):
    LOST_UNIVERSE = "LostUniverse"
    IDLE = "Idle"
    ARMED = "Armed"


class Action(Enum):
    RESET_NEIGHBOUR = "reset_neighbour"


def transition(state: WatchdogState, universe_alive: bool,
               neighbour_alive: bool) -> Tuple[WatchdogState, Optional[Action]]:
    if not universe_alive:
        return WatchdogState.LOST_UNIVERSE, None

    if state is WatchdogState.LOST_UNIVERSE:
        return WatchdogState.IDLE, None
    if state is WatchdogState.IDLE:
        return (WatchdogState.ARMED, None) if neighbour_alive else (WatchdogState.IDLE, None)
    if state is WatchdogState.ARMED:
        if neighbour_alive:
            return WatchdogState.ARMED, None
        return WatchdogState.IDLE, Action.RESET_NEIGHBOUR
    raise ValueError(f"unknown watchdog state {state!r}")


_EDGE_REASONS = {
    (WatchdogState.LOST_UNIVERSE, WatchdogState.IDLE): "Found my universe.",
    (WatchdogState.IDLE, WatchdogState.LOST_UNIVERSE): "Lost my connection to the universe.",
    (WatchdogState.IDLE, WatchdogState.ARMED): "Neighbour is alive, activating watchdog.",
    (WatchdogState.ARMED, WatchdogState.LOST_UNIVERSE): "Lost my connection to the universe.",
    (WatchdogState.ARMED, WatchdogState.IDLE): "Lost connection to neighbour, RESETTING!",
}
_DRY_RUN_RESET_REASON = "Lost connection to neighbour; But DRY-RUN, not resetting neighbour."


class WatchdogStateMachine:
    def __init__(self, dry_run: bool = False):
        self.state = WatchdogState.LOST_UNIVERSE
        self.dry_run = dry_run

    def step(self, universe_alive: bool, neighbour_alive: bool) -> Optional[Action]:
        old = self.state
        self.state, action = transition(old, universe_alive, neighbour_alive)
        if self.state is not old:
            reason = _EDGE_REASONS[(old, self.state)]
            if self.dry_run and action is Action.RESET_NEIGHBOUR:
                reason = _DRY_RUN_RESET_REASON
            logger.warning("[%s -> %s] %s", old.value, self.state.value, reason)
        return action


class NeighbourWatch:
    """Per-tick driver: probe queue -> tracker -> booleans -> state machine -> actuator."""

    def __init__(self, neighbour: Host, tracker: LivenessTracker, evaluator: QuorumEvaluator,
                 actuator, timeout: float = config.WATCHDOG["timeout"], dry_run: bool = False):
        self.neighbour = neighbour
        self.tracker = tracker
        self.evaluator = evaluator
        self.timeout = float(timeout)
        self.dry_run = dry_run
        self.actuator = DryRunActuator() if dry_run else actuator
        self.machine = WatchdogStateMachine(dry_run)

    @property
    def state(self) -> WatchdogState:
        return self.machine.state

    def drain(self, queue: asyncio.Queue) -> int:
        """Move every pending probe result into the tracker. Never blocks."""
        drained = 0
        while True:
            try:
                result = queue.get_nowait()
            except asyncio.QueueEmpty:
                return drained
            drained += 1
            if result.alive:
                self.tracker.record(result.address, result.timestamp)
            else:
                logger.info("Failed to ping %s", result.address)

    async def tick(self, now: float) -> Optional[Action]:
        universe_alive = self.evaluator.universe_alive(now)
        neighbour_alive = self.evaluator.neighbour_alive(now, self.timeout)
        logger.debug("tick: state=%s universe_alive=%s (%d reachable) neighbour_alive=%s",
                     self.state.value, universe_alive, self.evaluator.reachable_members(now), neighbour_alive)

        action = self.machine.step(universe_alive, neighbour_alive)
        if action is Action.RESET_NEIGHBOUR:
            await self._reset()
        return action

    async def _reset(self):
        try:
            await self.actuator.reset(self.neighbour.name)
        except ActuationError as e:
            logger.error("Error triggering reset: %s", e)
            return
        if not self.dry_run:
            logger.info("Reset triggered.")
