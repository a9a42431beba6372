"""Shared utility functions for the MCP project initializer.

Provides Rich-based status output, slug helpers, and small file-system
helpers used by the scaffold pipeline.  The console writes to stderr so that
stdout stays free for a stdio transport.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def technology_slug(label: str) -> str:
    """Convert a technology label to a filename-safe slug.

    Every character outside ``[a-z0-9]`` becomes a hyphen; runs are *not*
    collapsed, so the mapping is one-to-one per character.

    Examples::

        technology_slug("TypeScript") -> "typescript"
        technology_slug("MCP (Model Context Protocol)") -> "mcp--model-context-protocol-"
    """
    return re.sub(r"[^a-z0-9]", "-", label.lower())


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The directory as a ``Path``.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def _write_file(path: Path, content: str | bytes) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")


async def write_file(path: str | Path, content: str | bytes) -> Path:
    """Write *content* to *path* off the event loop, overwriting any file."""
    out = Path(path)
    await asyncio.to_thread(_write_file, out, content)
    return out


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_info(message: str) -> None:
    """Print a dimmed progress message."""
    console.print(f"[dim]{escape(message)}[/dim]")
