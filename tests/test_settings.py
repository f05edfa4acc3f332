import pytest

from core.settings import Settings, parse_settings, split_hosts
from core.utils import verbosity_to_level


def test_defaults() -> None:
    settings = parse_settings(["-n", "pine2"])
    assert settings == Settings(neighbour="pine2", universe=("pine1", "pine2", "pine3", "pine4", "pine5"))
    assert settings.timeout == 600
    assert settings.universe_window == 30
    assert settings.quorum == 2
    assert not settings.dry_run


def test_overrides() -> None:
    settings = parse_settings(["-n", "pine3", "-u", "a, b,,c", "-t", "120", "--dry-run", "-vv", "-i", "5"])
    assert settings.universe == ("a", "b", "c")
    assert settings.timeout == 120
    assert settings.dry_run
    assert settings.verbosity == 2
    assert settings.interval == 5


def test_settings_are_immutable() -> None:
    settings = parse_settings(["-n", "pine2"])
    with pytest.raises(AttributeError):
        settings.timeout = 1


@pytest.mark.parametrize("argv", [[], ["-n", "x", "-i", "0.5"], ["-n", "x", "-i", "11"], ["-n", "x", "-t", "0"],
                                  ["-n", "x", "-u", ","]])
def test_invalid_arguments_exit(argv) -> None:
    with pytest.raises(SystemExit) as exc:
        parse_settings(argv)
    assert exc.value.code == 2


def test_split_hosts() -> None:
    assert split_hosts(" pine1 ,pine2,") == ["pine1", "pine2"]


@pytest.mark.parametrize("verbosity, level", [(0, 40), (1, 30), (2, 20), (3, 10), (7, 10)])
def test_verbosity_levels(verbosity, level) -> None:
    assert verbosity_to_level(verbosity) == level
