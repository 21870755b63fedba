"""Periodic status polling with explicit cancellation."""

import asyncio
import logging
from typing import Callable, Optional

from ..dashboard.state import DashboardState, refresh
from .client import PipelineClient

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[DashboardState], None]


class StatusPoller:
    """Refresh a dashboard state every `interval` seconds until stopped.

    Refreshes are serialized: a manual `refresh()` issued while a timed one
    is in flight waits for it instead of racing it.
    """

    def __init__(
        self,
        client: PipelineClient,
        state: Optional[DashboardState] = None,
        interval: float = 30,
    ) -> None:
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self.client = client
        self.state = state if state is not None else DashboardState()
        self.interval = interval
        self._lock = asyncio.Lock()

    async def refresh(self) -> DashboardState:
        """Run one status query against the shared state."""
        async with self._lock:
            return await refresh(self.state, self.client)

    async def run(self, stop: asyncio.Event, on_update: Optional[UpdateCallback] = None) -> None:
        """
        Poll until `stop` is set.

        With an interval of 0 polling is disabled: one refresh, then return.
        A refresh already running when `stop` is set finishes first; its
        subprocess is never killed.
        """
        while True:
            await self.refresh()
            if on_update is not None:
                on_update(self.state)
            if self.interval == 0 or stop.is_set():
                return
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                continue
            logger.debug("Status polling stopped")
            return
