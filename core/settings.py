# core/settings.py
"""
Runtime settings.

Settings is built exactly once at startup, from the command line and the
defaults in config.py, and is never mutated afterwards.

API:
- build_parser() -> argparse.ArgumentParser
- parse_settings(argv) -> Settings
"""

import argparse
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import config


@dataclass(frozen=True)
class Settings:
    neighbour: str
    universe: Tuple[str, ...]
    timeout: float = config.WATCHDOG["timeout"]
    dry_run: bool = False
    verbosity: int = 0
    interval: float = config.WATCHDOG["interval"]
    universe_window: float = config.WATCHDOG["universe_window"]
    quorum: int = config.WATCHDOG["quorum"]
    probe_interval: float = config.PROBER["interval"]
    probe_timeout: float = config.PROBER["timeout"]
    gpio_chip: str = config.ACTUATOR["chip"]
    gpio_line: int = config.ACTUATOR["line"]
    pulse_s: float = config.ACTUATOR["pulse_s"]


def split_hosts(value: str) -> List[str]:
    hosts = [h.strip() for h in value.split(",")]
    return [h for h in hosts if h]


def _universe(value: str) -> Tuple[str, ...]:
    hosts = split_hosts(value)
    if not hosts:
        raise argparse.ArgumentTypeError("universe needs at least one host")
    return tuple(hosts)


def _positive(value: str) -> float:
    try:
        v = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if v <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value!r}")
    return v


def _interval(value: str) -> float:
    v = _positive(value)
    lo, hi = config.WATCHDOG["min_interval"], config.WATCHDOG["max_interval"]
    if not lo <= v <= hi:
        raise argparse.ArgumentTypeError(f"interval must be between {lo:g} and {hi:g} seconds")
    return v


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neighbourhood-watch",
        description="Check our neighbour for health.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Verbose mode (-v, -vv, -vvv, etc)")
    parser.add_argument("-n", "--neighbour", required=True,
                        help="Hostname or IP address of our direct neighbour.")
    parser.add_argument("-u", "--universe", type=_universe, default=_universe(config.WATCHDOG["universe"]),
                        help="Comma separated hostnames of all our neighbours (the universe).")
    parser.add_argument("--dry-run", action="store_true",
                        help="Do not take any action when encountering problems.")
    parser.add_argument("-t", "--timeout", type=_positive, default=float(config.WATCHDOG["timeout"]),
                        help="Seconds without contact after which our neighbour is considered dead and will be reset.")
    parser.add_argument("-i", "--interval", type=_interval, default=float(config.WATCHDOG["interval"]),
                        help="Seconds between watchdog evaluations.")
    parser.add_argument("--gpio-chip", default=config.ACTUATOR["chip"],
                        help="GPIO character device driving the reset line.")
    parser.add_argument("--gpio-line", type=int, default=config.ACTUATOR["line"],
                        help="Line offset of the reset line on the GPIO chip.")
    return parser


def parse_settings(argv: Optional[Sequence[str]] = None) -> Settings:
    args = build_parser().parse_args(argv)
    return Settings(
        neighbour=args.neighbour,
        universe=args.universe,
        timeout=args.timeout,
        dry_run=args.dry_run,
        verbosity=args.verbose,
        interval=args.interval,
        gpio_chip=args.gpio_chip,
        gpio_line=args.gpio_line,
    )
