import itertools
import random

import pytest

from modules.safety.neighbour_watch import Action, WatchdogState, WatchdogStateMachine, transition

LOST = WatchdogState.LOST_UNIVERSE
IDLE = WatchdogState.IDLE
ARMED = WatchdogState.ARMED
RESET = Action.RESET_NEIGHBOUR


@pytest.mark.parametrize("state, universe_alive, neighbour_alive, expected", [
    (LOST, False, False, (LOST, None)),
    (LOST, False, True, (LOST, None)),
    (LOST, True, False, (IDLE, None)),
    (LOST, True, True, (IDLE, None)),
    (IDLE, False, False, (LOST, None)),
    (IDLE, False, True, (LOST, None)),
    (IDLE, True, True, (ARMED, None)),
    (IDLE, True, False, (IDLE, None)),
    (ARMED, False, False, (LOST, None)),
    (ARMED, False, True, (LOST, None)),
    (ARMED, True, False, (IDLE, RESET)),
    (ARMED, True, True, (ARMED, None)),
])
def test_transition_table(state, universe_alive, neighbour_alive, expected) -> None:
    assert transition(state, universe_alive, neighbour_alive) == expected


def test_starts_lost() -> None:
    assert WatchdogStateMachine().state is LOST


def test_never_arms_straight_from_lost() -> None:
    machine = WatchdogStateMachine()
    assert machine.step(True, True) is None
    assert machine.state is IDLE
    assert machine.step(True, True) is None
    assert machine.state is ARMED


def test_reset_only_on_armed_to_idle_edge() -> None:
    rng = random.Random(1234)
    inputs = list(itertools.product((False, True), repeat=2))
    machine = WatchdogStateMachine()
    for _ in range(2000):
        before = machine.state
        universe_alive, neighbour_alive = rng.choice(inputs)
        action = machine.step(universe_alive, neighbour_alive)
        if action is RESET:
            assert (before, machine.state) == (ARMED, IDLE)
        else:
            assert (before, machine.state) != (ARMED, IDLE)
        if machine.state is ARMED:
            assert before in (IDLE, ARMED)


def test_no_repeat_reset_while_idle() -> None:
    machine = WatchdogStateMachine()
    machine.step(True, True)
    machine.step(True, True)
    assert machine.step(True, False) is RESET
    for _ in range(10):
        assert machine.step(True, False) is None
    assert machine.state is IDLE


def test_same_inputs_give_same_states() -> None:
    inputs = [(True, False), (True, True), (True, True), (False, False), (True, True), (True, True), (True, False)]
    runs = []
    for _ in range(2):
        machine = WatchdogStateMachine()
        runs.append([(machine.step(u, n), machine.state) for u, n in inputs])
    assert runs[0] == runs[1]
    assert runs[0][-1] == (RESET, IDLE)


def test_edges_are_logged(watch_logs) -> None:
    machine = WatchdogStateMachine()
    machine.step(True, False)
    assert "[LostUniverse -> Idle] Found my universe." in watch_logs.text


def test_dry_run_edge_is_one_line(watch_logs) -> None:
    machine = WatchdogStateMachine(dry_run=True)
    machine.step(True, True)
    machine.step(True, True)
    assert machine.step(True, False) is RESET
    assert "[Armed -> Idle] Lost connection to neighbour; But DRY-RUN, not resetting neighbour." in watch_logs.text
    assert "RESETTING!" not in watch_logs.text
