"""Periodic purge of expired pastes.

Lazy deletion on read never touches pastes nobody reads again.  The reaper
bounds storage growth by sweeping on a fixed interval, independently of the
read path.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from sealbin.errors import StoreError
from sealbin.store.base import PasteStore

logger = logging.getLogger(__name__)


class ExpiredPasteReaper:
    """Runs ``store.purge_expired`` every *interval* seconds."""

    def __init__(self, store: PasteStore, interval: float) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.store = store
        self.interval = interval
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        """Purge once; store failures are logged and reported as 0."""
        try:
            removed = await self.store.purge_expired(datetime.now(timezone.utc))
        except StoreError:
            logger.warning("Expired paste purge failed", exc_info=True)
            return 0
        if removed:
            logger.info("Purged %d expired pastes", removed)
        return removed

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.run_once()
            except Exception:
                logger.exception("Expired paste purge crashed; retrying next interval")

    def start(self) -> None:
        if not self.running:
            self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
