"""Background refresh of the pricing catalog."""

from __future__ import annotations

import asyncio
import logging

from checkoutapi.pricing.catalog import PricingCatalog

logger = logging.getLogger(__name__)


class PricingWatcher:
    """Periodically reload a catalog whose source has changed.

    Each check runs in a worker thread so file I/O never blocks the event
    loop. Failed reloads are logged by the catalog and retried next tick.

    Example:
        >>> watcher = PricingWatcher(catalog, interval=5.0)
        >>> watcher.start()
        >>> ...
        >>> await watcher.stop()
    """

    def __init__(self, catalog: PricingCatalog, interval: float = 5.0):
        if interval <= 0:
            raise ValueError("interval must be greater than zero")
        self.catalog = catalog
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the refresh loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="pricing-watcher")
        logger.info(f"Watching {self.catalog.source!r} every {self.interval}s")

    async def stop(self) -> None:
        """Cancel the refresh loop and wait for it to finish."""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Pricing watcher stopped")

    async def check_now(self) -> bool:
        """Run a single change check; True if new rules were loaded."""
        return await asyncio.to_thread(self.catalog.refresh_if_changed)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.check_now()
            except Exception:
                logger.exception("Unexpected error while refreshing pricing rules")
