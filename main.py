"""
main.py
Neighbourhood Watch entrypoint.
Resolves hosts, starts the prober and runs the watchdog loop.
"""

import asyncio
import signal
import sys
from typing import Optional, Sequence

from core.actuator import GpioResetLine
from core.hosts import HostResolutionError, resolve_hosts
from core.prober import Prober
from core.settings import Settings, parse_settings
from core.utils import get_logger, set_verbosity
from modules.safety.liveness import LivenessTracker
from modules.safety.neighbour_watch import NeighbourWatch
from modules.safety.quorum import QuorumEvaluator

logger = get_logger("main")


async def main(settings: Settings):
    logger.info("Initializing Neighbourhood Watch...")

    # --- Resolve hosts (fatal on failure) ---
    neighbour, universe = resolve_hosts(settings.neighbour, settings.universe)
    universe_addrs = [h.address for h in universe]

    # --- Initialize Core Components ---
    tracker = LivenessTracker([neighbour.address] + universe_addrs)
    evaluator = QuorumEvaluator(tracker, neighbour.address, universe_addrs,
                                window=settings.universe_window, quorum=settings.quorum)
    actuator = GpioResetLine(settings.gpio_chip, settings.gpio_line, pulse_s=settings.pulse_s)
    watch = NeighbourWatch(neighbour, tracker, evaluator, actuator,
                           timeout=settings.timeout, dry_run=settings.dry_run)
    if settings.dry_run:
        logger.warning("DRY-RUN: the neighbour will never be reset")

    # --- Start Prober ---
    queue: asyncio.Queue = asyncio.Queue()
    prober = Prober([neighbour.address] + universe_addrs, queue,
                    interval_s=settings.probe_interval, timeout_s=settings.probe_timeout)
    loop = asyncio.get_running_loop()
    main_task = asyncio.current_task()
    loop.add_signal_handler(signal.SIGTERM, main_task.cancel)
    prober.start()

    # --- Watchdog Loop ---
    try:
        while True:
            # 1. Pick up whatever the prober delivered since the last tick
            watch.drain(queue)

            # 2. Evaluate on a single snapshot and possibly reset
            await watch.tick(loop.time())

            await asyncio.sleep(settings.interval)
    finally:
        loop.remove_signal_handler(signal.SIGTERM)
        await prober.stop()


def run(argv: Optional[Sequence[str]] = None) -> int:
    settings = parse_settings(argv)
    set_verbosity(settings.verbosity)
    try:
        asyncio.run(main(settings))
    except HostResolutionError as e:
        logger.error("%s", e)
        return 1
    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.warning("Shutting down Neighbourhood Watch...")
    return 0


if __name__ == "__main__":
    sys.exit(run())
