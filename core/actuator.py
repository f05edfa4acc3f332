# core/actuator.py
"""
Reset actuator.

Responsibilities:
- Power-cycle the neighbour by pulsing its reset line through the GPIO
  character device.
- Provide a dry-run stand-in with the same interface that only logs.

The reset pin is active low. The line is requested as an output that starts
high, driven low for pulse_s, then released high again; the request is
released after every pulse so nothing is held between resets.

APIs:
- GpioResetLine(chip, line, pulse_s, consumer)
- async reset(peer)  -> None, raises ActuationError
- DryRunActuator()
- list_chips() -> List[ChipDescription]
"""

import asyncio
import glob
from dataclasses import dataclass
from typing import List

import gpiod
from gpiod.line import Direction, Value

import config
from core.utils import get_logger

logger = get_logger("actuator")


class ActuationError(Exception):
    pass


@dataclass(frozen=True)
class ChipDescription:
    path: str
    name: str
    label: str
    num_lines: int


class GpioResetLine:
    def __init__(self, chip: str = config.ACTUATOR["chip"], line: int = config.ACTUATOR["line"],
                 pulse_s: float = config.ACTUATOR["pulse_s"], consumer: str = config.ACTUATOR["consumer"]):
        self.chip = chip
        self.line = int(line)
        self.pulse_s = float(pulse_s)
        self.consumer = consumer
        self.pulses = 0

    def _request(self):
        settings = gpiod.LineSettings(direction=Direction.OUTPUT, output_value=Value.ACTIVE)
        return gpiod.request_lines(self.chip, consumer=self.consumer, config={self.line: settings})

    async def reset(self, peer: str):
        """Pulse the reset line once. Raises ActuationError on any driver failure."""
        try:
            with self._request() as request:
                logger.info("Resetting our neighbour %s", peer)
                request.set_value(self.line, Value.INACTIVE)
                try:
                    await asyncio.sleep(self.pulse_s)
                finally:
                    request.set_value(self.line, Value.ACTIVE)
        except (OSError, ValueError) as e:
            raise ActuationError(f"{self.chip} line {self.line}: {e}") from e
        self.pulses += 1


class DryRunActuator:
    """Stand-in used under --dry-run; never touches hardware."""

    def __init__(self):
        self.pulses = 0

    async def reset(self, peer: str):
        logger.debug("DRY-RUN: suppressed reset pulse for %s", peer)
        self.pulses += 1


def list_chips(pattern: str = "/dev/gpiochip*") -> List[ChipDescription]:
    chips = []
    for path in sorted(glob.glob(pattern)):
        if not gpiod.is_gpiochip_device(path):
            continue
        try:
            with gpiod.Chip(path) as chip:
                info = chip.get_info()
        except OSError as e:
            logger.error("Could not open gpio chip %s: %s", path, e)
            continue
        chips.append(ChipDescription(path, info.name, info.label, info.num_lines))
    return chips
