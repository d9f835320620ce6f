"""Live progress display for generation runs.

Shows each text and image call as it happens, plus retries, fallbacks
and run warnings.

Usage:
    from anchor_studio.cli.core.progress import StudioProgressDisplay

    display = StudioProgressDisplay(console)
    studio = create_studio(settings, event_callback=display.handle_event)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rich.console import Console


@dataclass
class StudioCallStats:
    """Statistics for calls during one CLI invocation."""

    text_calls: int = 0
    image_calls: int = 0
    images_received: int = 0
    images_missing: int = 0
    retries: int = 0
    fallbacks: int = 0
    total_duration: float = 0.0


class StudioProgressDisplay:
    """Renders pipeline events as console lines.

    Event types handled:
    - text_call / text_response: text generation started / finished
    - text_failed: a text call failed after retries
    - image_call / image_response / image_missing / image_error: image calls
    - image_fallback: a role is retried with a generic prompt
    - retry: a transient error is being retried after a delay
    - run_warning: a non-fatal problem was recorded on the run
    """

    def __init__(self, console: Console, verbose: bool = True):
        self.console = console
        self.verbose = verbose
        self.stats = StudioCallStats()
        self._header_shown = False

    def _show_header(self) -> None:
        if not self._header_shown:
            self.console.print()
            self.console.print("[bold]>>> AI CALLS[/bold]")
            self._header_shown = True

    async def handle_event(self, event: dict[str, Any]) -> None:
        """Handle one pipeline event."""
        event_type = event.get("type", "")
        handler = {
            "text_call": self._handle_text_call,
            "text_response": self._handle_text_response,
            "text_failed": self._handle_text_failed,
            "image_call": self._handle_image_call,
            "image_response": self._handle_image_response,
            "image_missing": self._handle_image_missing,
            "image_error": self._handle_image_error,
            "image_fallback": self._handle_fallback,
            "retry": self._handle_retry,
            "run_warning": self._handle_warning,
        }.get(event_type)
        if handler is not None:
            handler(event)

    def _handle_text_call(self, event: dict[str, Any]) -> None:
        self._show_header()
        self.stats.text_calls += 1
        if self.verbose:
            extras = []
            if event.get("images"):
                extras.append(f"{event['images']} image(s)")
            if event.get("search"):
                extras.append("search")
            extra_str = f" [dim]({', '.join(extras)})[/dim]" if extras else ""
            self.console.print(f"  [cyan][TEXT][/cyan] {event.get('model', 'unknown')} - {event.get('task', '')}{extra_str}")

    def _handle_text_response(self, event: dict[str, Any]) -> None:
        duration = event.get("duration_seconds", 0.0)
        self.stats.total_duration += duration
        self.console.print(f"  [green][OK][/green] {event.get('task', '')} - {duration:.1f}s")

    def _handle_text_failed(self, event: dict[str, Any]) -> None:
        self.console.print(f"  [red][FAIL][/red] {event.get('task', '')}: {event.get('error', 'unknown error')}")

    def _handle_image_call(self, event: dict[str, Any]) -> None:
        self._show_header()
        self.stats.image_calls += 1
        if self.verbose:
            self.console.print(
                f"  [cyan][IMAGE][/cyan] {event.get('task', '')} [dim]({event.get('aspect_ratio', '')})[/dim]"
            )

    def _handle_image_response(self, event: dict[str, Any]) -> None:
        duration = event.get("duration_seconds", 0.0)
        self.stats.images_received += 1
        self.stats.total_duration += duration
        self.console.print(f"  [green][OK][/green] {event.get('task', '')} - {duration:.1f}s")

    def _handle_image_missing(self, event: dict[str, Any]) -> None:
        self.stats.images_missing += 1
        self.console.print(f"  [yellow][EMPTY][/yellow] {event.get('task', '')}: no image returned")

    def _handle_image_error(self, event: dict[str, Any]) -> None:
        self.stats.images_missing += 1
        self.console.print(f"  [red][FAIL][/red] {event.get('role', '')}: {event.get('error', 'unknown error')}")

    def _handle_fallback(self, event: dict[str, Any]) -> None:
        self.stats.fallbacks += 1
        self.console.print(f"  [yellow][FALLBACK][/yellow] {event.get('role', '')}: using generic prompt")

    def _handle_retry(self, event: dict[str, Any]) -> None:
        self.stats.retries += 1
        self.console.print(
            f"  [yellow][RETRY][/yellow] {event.get('operation', '')} in "
            f"{event.get('delay_seconds', 0):.0f}s (attempt {event.get('attempt', '?')})"
        )

    def _handle_warning(self, event: dict[str, Any]) -> None:
        self.console.print(f"  [yellow][WARN][/yellow] {event.get('message', '')}")

    def show_summary(self) -> None:
        """Show summary of all calls."""
        if not (self.stats.text_calls or self.stats.image_calls):
            return
        self.console.print()
        self.console.print("[bold]>>> AI SUMMARY[/bold]")
        self.console.print(
            f"  Text calls: [cyan]{self.stats.text_calls}[/cyan]  "
            f"Image calls: [cyan]{self.stats.image_calls}[/cyan] "
            f"([green]{self.stats.images_received}[/green] ok, [red]{self.stats.images_missing}[/red] missing)"
        )
        if self.stats.retries or self.stats.fallbacks:
            self.console.print(
                f"  Retries: [yellow]{self.stats.retries}[/yellow]  Fallbacks: [yellow]{self.stats.fallbacks}[/yellow]"
            )
        self.console.print(f"  Time in calls: [yellow]{self.stats.total_duration:.1f}s[/yellow]")
