"""Fixed-delay pacing between consecutive image calls."""

from __future__ import annotations

import asyncio
import logging

from ..constants import IMAGE_CALL_DELAY_SECONDS
from .retry import SleepFunc

_logger = logging.getLogger("image_pipeline")


class CallPacer:
    """Suspends the pipeline for a fixed delay at each pacing point.

    The image backend rate-limits per minute, so the orchestrator awaits
    ``wait()`` between image calls instead of issuing them back to back.
    A delay of 0 disables pacing.
    """

    def __init__(self, delay_seconds: float = IMAGE_CALL_DELAY_SECONDS, sleep: SleepFunc = asyncio.sleep):
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self.delay_seconds = delay_seconds
        self._sleep = sleep
        self.total_waits = 0

    async def wait(self, reason: str = "") -> None:
        """Await the configured delay."""
        if self.delay_seconds <= 0:
            return
        self.total_waits += 1
        _logger.debug(f"PACE | wait:{self.delay_seconds:.1f}s | reason:{reason or '-'}")
        await self._sleep(self.delay_seconds)
