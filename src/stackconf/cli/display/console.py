"""Rich console setup and basic styling.

This module provides the shared console instance and the error printer used
by every command.
"""

from __future__ import annotations

import os

from rich.console import Console
from rich.markup import escape

# Respect NO_COLOR environment variable for testing and accessibility
console = Console(no_color=os.environ.get("NO_COLOR") == "1")


def print_error(message: str) -> None:
    """Print an error message verbatim (no markup, no wrapping)."""
    console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
