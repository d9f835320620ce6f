"""Rich console singleton for CLI output."""

import sys

from rich.console import Console

# Windows cp1252 cannot encode box drawing characters
_safe_box = sys.platform == "win32"

# Global console instance - used across all CLI modules
console = Console(safe_box=_safe_box)
