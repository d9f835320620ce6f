"""Retry wrapper for remote generation calls.

Every text and image request goes through ``RetryableCaller.call``.
Rate-limit and internal-error failures are retried with exponential
backoff; anything else propagates on the first attempt.

Backoff schedule with the defaults (3 retries, 5s initial delay):

    attempt 1 -> fail -> wait 5s
    attempt 2 -> fail -> wait 10s
    attempt 3 -> fail -> wait 20s
    attempt 4 -> fail -> original error re-raised
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import RETRY_INITIAL_DELAY_SECONDS, RETRY_MAX_RETRIES, TRANSIENT_ERROR_MARKERS
from ..errors import TransientRemoteError
from .events import AIEventCallback, EventEmitter

_logger = logging.getLogger("ai_calls")

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[Any]]


def is_transient_error(exc: BaseException) -> bool:
    """Check whether an error is worth retrying.

    Matches ``TransientRemoteError`` directly, otherwise looks for a
    rate-limit or internal-error marker in the lower-cased message.
    """
    if isinstance(exc, TransientRemoteError):
        return True
    message = str(exc).lower()
    return any(marker in message for marker in TRANSIENT_ERROR_MARKERS)


class RetryableCaller:
    """Runs zero-argument async operations with transient-error retries.

    The caller holds no per-call state, so one instance is shared by all
    providers in a studio.

    Usage:
        caller = RetryableCaller(max_retries=3, initial_delay=5.0)
        text = await caller.call(lambda: provider.generate(prompt), label="headline")
    """

    def __init__(
        self,
        max_retries: int = RETRY_MAX_RETRIES,
        initial_delay: float = RETRY_INITIAL_DELAY_SECONDS,
        sleep: SleepFunc = asyncio.sleep,
        event_callback: AIEventCallback = None,
    ):
        """Initialize the caller.

        Args:
            max_retries: Retries after the first attempt (attempts = max_retries + 1).
            initial_delay: Seconds to wait before the first retry; doubles each time.
            sleep: Awaitable sleep function. Tests inject a recorder here.
            event_callback: Optional callback receiving ``retry`` events.
        """
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self._sleep = sleep
        self._events = EventEmitter(event_callback)

    async def call(self, operation: Callable[[], Awaitable[T]], label: str = "remote_call") -> T:
        """Execute ``operation``, retrying transient failures.

        Args:
            operation: Zero-argument coroutine function performing one remote call.
            label: Short name used in logs and events.

        Returns:
            Whatever the operation returns.

        Raises:
            The operation's own exception, unchanged, once it is
            non-transient or the retry budget is spent.
        """
        pending: dict[str, Any] = {}

        def log_before_sleep(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception() if retry_state.outcome else None
            wait = retry_state.next_action.sleep if retry_state.next_action else 0.0
            pending.update(attempt=retry_state.attempt_number, error=str(error), wait=wait)
            _logger.warning(
                f"RETRY | op:{label} | attempt:{retry_state.attempt_number}/{self.max_retries + 1} | "
                f"wait:{wait:.1f}s | error:{error}"
            )

        async def sleep_with_event(seconds: float) -> None:
            await self._events.emit(
                "retry",
                operation=label,
                attempt=pending.get("attempt"),
                delay_seconds=seconds,
                error=pending.get("error", "")[:200],
            )
            await self._sleep(seconds)

        retrying = AsyncRetrying(
            sleep=sleep_with_event,
            retry=retry_if_exception(is_transient_error),
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(multiplier=self.initial_delay),
            before_sleep=log_before_sleep,
            reraise=True,
        )

        # AsyncRetrying only awaits callables that are coroutine functions.
        async def attempt() -> T:
            return await operation()

        return await retrying(attempt)
