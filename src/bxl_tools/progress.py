"""
Progress callback infrastructure for parsing large BXL files.

A progress callback receives an integer percentage (0-100). Values reported
during one parse never decrease; 0 is always reported first and 100 last.

Example::

    from bxl_tools import read_file
    from bxl_tools.progress import create_print_callback

    doc, logs = read_file("board.bxl", progress=create_print_callback())

    # Or with any callable
    read_file("board.bxl", progress=lambda percent: print(f"{percent}%"))

For CLI usage, see bxl_tools.cli.progress for Rich-based progress bars.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from contextlib import contextmanager
from typing import Optional, TypeAlias

# Type alias for progress callbacks
ProgressCallback: TypeAlias = Callable[[int], None]


class ProgressThrottle:
    """Forward position updates as percentages, skipping small steps.

    An update is forwarded only once at least ``step`` of the total has been
    consumed since the last forwarded value. ``start`` and ``finish`` always
    forward.

    Example::

        throttle = ProgressThrottle(callback, total=len(text))
        throttle.start()               # reports 0
        throttle.update(position)      # reports only after >= 1% more input
        throttle.finish()              # reports 100
    """

    def __init__(self, callback: Optional[ProgressCallback], total: int, step: float = 0.01):
        """Initialize the throttle.

        Args:
            callback: Callback to forward to. If None, nothing is reported.
            total: Size of the input, in the same unit as positions
            step: Minimum fraction of the total between two reports
        """
        self._callback = callback
        self._total = total
        self._delta = int(total * step)
        self._last_position = 0
        self._last_percent = -1

    @property
    def last_percent(self) -> int:
        """Most recently reported percentage, or -1 before the first report."""
        return self._last_percent

    def start(self) -> None:
        self._last_position = 0
        self._emit(0)

    def update(self, position: int, force: bool = False) -> None:
        """Report progress for the given position if enough input was consumed."""
        if self._callback is None:
            return
        if not force and position < self._last_position + self._delta:
            return
        self._last_position = position
        percent = position * 100 // self._total if self._total else 100
        self._emit(min(percent, 100))

    def finish(self) -> None:
        self._emit(100)

    def _emit(self, percent: int) -> None:
        if self._callback is None:
            return
        # Never move backwards
        percent = max(percent, self._last_percent)
        self._last_percent = percent
        self._callback(percent)


def create_print_callback(file=None) -> ProgressCallback:
    """Create a simple callback that prints progress to a file.

    Args:
        file: File to write to (default: sys.stderr)

    Returns:
        A progress callback that prints progress.
    """
    output = file or sys.stderr

    def print_callback(percent: int) -> None:
        print(f"{percent}%", file=output, flush=True)

    return print_callback


def create_cli_adapter(quiet: bool = False, description: str = "Parsing..."):
    """Create an adapter that bridges progress callbacks to CLI progress bars.

    This integrates with the Rich-based progress bars in bxl_tools.cli.progress.

    Args:
        quiet: If True, creates a no-op adapter
        description: Task description shown next to the bar

    Returns:
        A context manager that provides both CLI progress and callback progress.

    Example::

        with create_cli_adapter(quiet=args.quiet) as (progress, callback):
            doc, logs = read_file("board.bxl", progress=callback)
    """
    from .cli.progress import create_progress

    @contextmanager
    def adapter():
        with create_progress(quiet=quiet) as progress:
            task_id = progress.add_task(description, total=100)

            def callback(percent: int) -> None:
                progress.update(task_id, completed=percent)

            yield progress, callback

    return adapter()
