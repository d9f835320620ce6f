"""Cross-cutting services: retries, call pacing and event emission."""

from .events import AIEventCallback, EventEmitter
from .pacing import CallPacer
from .retry import RetryableCaller, is_transient_error

__all__ = [
    "AIEventCallback",
    "CallPacer",
    "EventEmitter",
    "RetryableCaller",
    "is_transient_error",
]
