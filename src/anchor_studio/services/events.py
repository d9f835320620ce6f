"""Structured event emission for pipeline observers.

Components accept an optional async callback and report what they are
doing as plain dicts with a ``type`` key (``text_call``, ``image_call``,
``retry``, ``image_fallback``, ``run_warning`` ...). The CLI uses these
for progress display; tests use them to assert ordering.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

_logger = logging.getLogger("ai_calls")

# Type for AI event callback
AIEventCallback = Callable[[dict[str, Any]], Awaitable[None]] | None


class EventEmitter:
    """Forwards events to an optional async callback.

    A failing observer is logged and ignored so that it cannot alter the
    outcome of a generation run.
    """

    def __init__(self, callback: AIEventCallback = None):
        self._callback = callback

    @property
    def enabled(self) -> bool:
        return self._callback is not None

    async def emit(self, event_type: str, **fields: Any) -> None:
        """Emit one event if a callback is set."""
        if not self._callback:
            return
        event = {"type": event_type, **fields}
        try:
            await self._callback(event)
        except Exception as e:
            _logger.warning(f"EVENT_CALLBACK_FAILED | type:{event_type} | error:{e}")
