# core/prober.py
"""
Prober: background ICMP reachability checks.

Responsibilities:
- Ping every configured address once per round, concurrently.
- Push one timestamped ProbeResult per address into a queue owned by the
  control loop. A non-response is still pushed (rtt=None) so it can be logged;
  it never refreshes liveness.

API:
- Prober(addresses, queue, interval_s, timeout_s)
- start() / stop()
- probe_once() -> List[ProbeResult]
"""

import asyncio
import functools
from dataclasses import dataclass
from typing import Iterable, List, Optional

import ping3
import ping3.errors

from core.utils import get_logger

logger = get_logger("prober")


@dataclass(frozen=True)
class ProbeResult:
    address: str
    timestamp: float
    rtt: Optional[float] = None

    @property
    def alive(self) -> bool:
        return self.rtt is not None


class Prober:
    def __init__(self, addresses: Iterable[str], queue: asyncio.Queue,
                 interval_s: float = 1.0, timeout_s: float = 1.0):
        # keep order, drop duplicates (neighbour may also be a universe member)
        self.addresses: List[str] = list(dict.fromkeys(addresses))
        self.queue = queue
        self.interval = float(interval_s)
        self.timeout = float(timeout_s)
        self._task: Optional[asyncio.Task] = None
        self._running = False

    def _ping(self, address: str) -> Optional[float]:
        try:
            rtt = ping3.ping(address, timeout=self.timeout, unit="s")
        except (OSError, ping3.errors.PingError) as e:
            logger.info("Ping to %s failed: %s", address, e)
            return None
        # ping3 reports timeouts as None and other failures as False
        if rtt is None or rtt is False:
            return None
        return float(rtt)

    async def _probe(self, address: str) -> ProbeResult:
        loop = asyncio.get_running_loop()
        rtt = await loop.run_in_executor(None, functools.partial(self._ping, address))
        return ProbeResult(address, loop.time(), rtt)

    async def probe_once(self) -> List[ProbeResult]:
        """Run one round and enqueue every result."""
        results = await asyncio.gather(*(self._probe(addr) for addr in self.addresses))
        for result in results:
            self.queue.put_nowait(result)
        return list(results)

    async def _run(self):
        self._running = True
        while self._running:
            try:
                await self.probe_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Probe round failed")
            await asyncio.sleep(self.interval)

    # ----------------------
    # Control
    # ----------------------
    def start(self) -> asyncio.Task:
        """Start probing in the background on the running loop."""
        if self._task and not self._task.done():
            return self._task
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info("Prober started for %s", self.addresses)
        return self._task

    async def stop(self):
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Prober stopped.")
