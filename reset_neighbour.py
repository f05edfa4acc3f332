"""
reset_neighbour.py
Reset our Pine64 cluster neighbour via GPIO, by hand.
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

import config
from core.actuator import ActuationError, GpioResetLine, list_chips
from core.utils import get_logger, set_verbosity

logger = get_logger("reset_neighbour")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reset-neighbour",
        description="Reset our Pine64 cluster neighbour via GPIO.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Verbose mode (-v, -vv, -vvv, etc)")
    parser.add_argument("-l", "--list-chips", action="store_true",
                        help="List GPIO chips")
    parser.add_argument("--delay", type=float, default=config.ACTUATOR["countdown_s"],
                        help="Seconds to wait before pulling the reset line.")
    parser.add_argument("--gpio-chip", default=config.ACTUATOR["chip"])
    parser.add_argument("--gpio-line", type=int, default=config.ACTUATOR["line"])
    return parser


async def reset(line: GpioResetLine, delay: float):
    print(f"Resetting neighbour in {delay:g}s...")
    await asyncio.sleep(delay)
    print("Resetting!")
    await line.reset(f"{line.chip}:{line.line}")
    print("Done.")


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    set_verbosity(args.verbose)

    if args.list_chips:
        print("Checking gpio lines:")
        for chip in list_chips():
            print(f"* gpio {chip.name} ({chip.label}) has {chip.num_lines} lines.")

    line = GpioResetLine(args.gpio_chip, args.gpio_line)
    try:
        asyncio.run(reset(line, args.delay))
    except ActuationError as e:
        logger.error("Error triggering reset: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(run())
