"""Typer app configuration and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="studio",
    help="AI news content studio: scripts, anchor images, social copy and video prompts",
    add_completion=False,
)

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def register_commands() -> None:
    """Register all commands from feature modules."""
    from .studio.commands import broll, multi, paragraphs, single, thumbnail

    app.command(name="single")(single)
    app.command(name="multi")(multi)
    app.command(name="thumbnail")(thumbnail)
    app.command(name="broll")(broll)
    app.command(name="paragraphs")(paragraphs)


def setup_logging(log_dir: Path) -> None:
    """Configure logging for CLI.

    - Suppresses console output from libraries
    - Writes AI requests/responses to ``ai_calls.log``
    - Writes image pipeline and run events to ``studio.log``
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    # Remove any default console handlers from root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.CRITICAL)

    for logger_name in ["httpx", "httpcore", "google_genai", "asyncio"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

    formatter = logging.Formatter(_LOG_FORMAT)
    handlers: dict[str, logging.Handler] = {}
    for logger_name, filename in [
        ("ai_calls", "ai_calls.log"),
        ("image_pipeline", "studio.log"),
        ("studio", "studio.log"),
    ]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.handlers = []
        if filename not in handlers:
            handler = logging.FileHandler(log_dir / filename, encoding="utf-8")
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(formatter)
            handlers[filename] = handler
        logger.addHandler(handlers[filename])


@app.callback()
def main_callback(
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Directory for log files (default: logs/)"),
) -> None:
    """AI news content studio."""
    from ..providers.config import StudioSettings

    setup_logging(log_dir or StudioSettings().log_dir)


def main() -> None:
    """Console script entry point."""
    app()


# Register all commands
register_commands()
