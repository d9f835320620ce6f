"""Command line interface - a thin view layer over the content studio.

Package layout:
- core/: Shared types (Result), console and progress display
- studio/: single, multi, thumbnail, broll and paragraphs commands

Usage:
    studio single --headline "City announces new park" --output out/
    studio multi "Stock market rallies" "New vaccine approved" --output out/
"""

from .app import app, main

__all__ = ["app", "main"]
