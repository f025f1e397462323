"""Shared utility functions for the SFWP CLI.

Provides JSON I/O, file-system helpers and Rich-based console reporting.
Every command prints through the single module-level ``console`` so tests can
capture or silence output in one place.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.rule import Rule
from rich.status import Status
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> Path:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically.

    Args:
        data: Serialisable data (dict or list).
        path: Destination file path.

    Returns:
        The path that was written.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False)
    file_path.write_text(content + "\n", encoding="utf-8")
    return file_path


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def write_text(path: str | Path, content: str) -> Path:
    """Create parent dirs and write *content* as UTF-8 in one call."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    return file_path


def find_upwards(start: str | Path, filename: str) -> Path | None:
    """Return the first ``<dir>/<filename>`` found from *start* up to the root.

    The filesystem root itself is not searched.

    Examples::

        find_upwards("/srv/site/wp-content/plugins/sfwp", "wp-config.php")
        -> Path("/srv/site/wp-config.php")
    """
    current = Path(start).resolve()
    while current != Path(current.anchor):
        candidate = current / filename
        if candidate.is_file():
            return candidate
        current = current.parent
    return None


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_banner(title: str = "SFWP CLI") -> None:
    """Print a full-width banner rule at the start of a session."""
    console.print()
    console.print(Rule(f"[bold cyan] {title} [/bold cyan]", style="cyan"))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_info(message: str) -> None:
    console.print(f"[blue]{message}[/blue]")


def create_status(message: str) -> Status:
    """Create a Rich spinner for a short blocking step.

    Returns:
        A ``Status`` instance suitable for use as a context manager.
    """
    return console.status(message, spinner="dots")
