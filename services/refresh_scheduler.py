"""
Periodic Cache Refresh Service

Background task that keeps the price and funding caches warm for a fixed
watch-list of symbols, so user-facing requests usually hit the cache instead
of waiting on a full cascade.

Each tick (default every 30 seconds, matching the cache TTL) calls
get_price() and then get_funding_rates() for every watch-list symbol and
discards the results; the caches are populated as a side effect.

Lifecycle:
    - start() is idempotent; a second call while running does nothing
    - stop() prevents any further tick; a tick already in progress is
      allowed to finish rather than being cancelled
"""

import asyncio
from typing import Awaitable, Callable, List, Optional, Sequence

from core.logging import get_logger


class RefreshScheduler:
    """
    Cancellable repeating refresh task.

    Args:
        get_price: Coroutine function resolving one symbol's price
        get_funding_rates: Coroutine function resolving one symbol's funding rates
        symbols: Watch-list refreshed on every tick
        interval: Seconds between ticks

    Example:
        >>> scheduler = RefreshScheduler(resolver.get_price, aggregator.get_funding_rates, ["BTC", "ETH", "SEI"])
        >>> await scheduler.start()
        >>> ...
        >>> await scheduler.stop()
    """

    def __init__(
        self,
        get_price: Callable[[str], Awaitable[object]],
        get_funding_rates: Callable[[str], Awaitable[object]],
        symbols: Sequence[str],
        interval: float = 30.0
    ) -> None:
        self._logger = get_logger(__name__)
        self._get_price = get_price
        self._get_funding_rates = get_funding_rates
        self.symbols: List[str] = [s.upper() for s in symbols]
        self.interval = interval
        self._stop_event: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None
        self.ticks = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.is_running:
            return
        self._stop_event = asyncio.Event()
        self._logger.info(
            f"Starting price refresh every {self.interval}s for {', '.join(self.symbols)}"
        )
        self._task = asyncio.create_task(self._run(self._stop_event), name="price_refresh")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._logger.info("Stopping price refresh...")
        self._stop_event.set()
        task = self._task
        # Stays set until the loop exits so start() is a no-op while stopping
        try:
            await task
        except asyncio.CancelledError:
            pass
        finally:
            if self._task is task:
                self._task = None

    # ============================================
    # Core Loop
    # ============================================

    async def _run(self, stop_event: asyncio.Event) -> None:
        while not stop_event.is_set():
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.interval)
                break
            except asyncio.TimeoutError:
                pass
            await self._tick()

    async def _tick(self) -> None:
        started = asyncio.get_running_loop().time()
        try:
            await asyncio.gather(*(self._get_price(s) for s in self.symbols))
            await asyncio.gather(*(self._get_funding_rates(s) for s in self.symbols))
        except Exception as e:
            self._logger.error(f"Price update error: {e}")
        finally:
            self.ticks += 1
            elapsed = asyncio.get_running_loop().time() - started
            self._logger.debug(f"Refresh tick {self.ticks} finished in {elapsed:.2f}s")
