"""Interactive input helpers."""

from __future__ import annotations

from collections.abc import Callable

import typer
from rich.console import Console


def prompt_until_valid(
    console: Console,
    text: str,
    is_valid: Callable[[str], bool],
    error: str,
    *,
    empty_error: str | None = None,
) -> str:
    """Prompt repeatedly until ``is_valid`` accepts the (stripped) answer."""
    while True:
        value = typer.prompt(text, default="", show_default=False).strip()
        if not value and empty_error:
            console.print(f"[red]Error:[/red] {empty_error}")
        elif is_valid(value):
            return value
        else:
            console.print(f"[red]Error:[/red] {error}")


def ask_yes(text: str) -> bool:
    """Single y/n question: only ``y``/``Y`` is yes, anything else (including empty) is no."""
    return typer.prompt(f"{text} (y/n)", default="", show_default=False).strip() in ("y", "Y")
