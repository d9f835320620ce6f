"""Core utilities for CLI - shared types, console and progress display."""

from .console import console
from .progress import StudioProgressDisplay
from .types import Failure, Result, Success

__all__ = [
    "Failure",
    "Result",
    "StudioProgressDisplay",
    "Success",
    "console",
]
