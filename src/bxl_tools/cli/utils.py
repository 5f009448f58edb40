"""Shared utilities for CLI commands."""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import TYPE_CHECKING

from bxl_tools.exceptions import BxlToolsError

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "BXL_SUFFIXES",
    "collect_files",
    "configure_logging",
    "format_error",
    "get_error_console",
    "print_error",
]

# File suffixes picked up when a directory is given
BXL_SUFFIXES = (".bxl", ".xlr")

# Module-level console for error output, created lazily
_error_console: Console | None = None


def get_error_console() -> Console:
    """Get or create the Rich console for error output.

    The console is created lazily and cached for reuse.
    """
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True, force_terminal=None)
    return _error_console


def print_error(
    e: Exception,
    verbose: bool = False,
    use_rich: bool | None = None,
) -> None:
    """
    Print an exception with Rich formatting when available.

    Falls back to plain text for non-TTY output (pipes, JSON mode, etc.).

    Args:
        e: The exception to print
        verbose: If True, include full stack trace
        use_rich: Override automatic TTY detection (None = auto-detect)
    """
    console = get_error_console()

    if use_rich is None:
        use_rich = console.is_terminal

    if verbose:
        # Always use plain text for stack traces
        print(traceback.format_exc(), file=sys.stderr)
        return

    if use_rich and isinstance(e, BxlToolsError):
        from rich.markup import escape

        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
    else:
        print(format_error(e, verbose=False), file=sys.stderr)


def format_error(e: Exception, verbose: bool = False) -> str:
    """
    Format an exception for user-friendly display (plain text).

    Args:
        e: The exception to format
        verbose: If True, include full stack trace

    Returns:
        Formatted error message string
    """
    if verbose:
        return traceback.format_exc()

    if isinstance(e, BxlToolsError):
        return f"Error: {e}"

    # For other exceptions, show type and message
    return f"Error: {type(e).__name__}: {e}"


def configure_logging(verbose: bool) -> None:
    """Send library debug logging to stderr when verbose output is requested."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def collect_files(paths: list[str], suffixes: tuple[str, ...] = BXL_SUFFIXES) -> list[Path]:
    """Expand directories to the BXL files they contain; files are kept as given."""
    files: list[Path] = []
    for name in paths:
        path = Path(name)
        if path.is_dir():
            files.extend(
                sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() in suffixes)
            )
        else:
            files.append(path)
    return files
