"""Rich progress displays for bxl-tools commands.

Everything here writes to stderr so decoded text and JSON reports on stdout stay
clean. Off a terminal, or with ``--quiet``, the displays turn into no-ops.
"""

import sys
from contextlib import contextmanager

_console = None


def _stderr_console():
    global _console
    if _console is None:
        from rich.console import Console

        _console = Console(stderr=True)
    return _console


def _show_live(quiet: bool) -> bool:
    return not quiet and sys.stderr.isatty()


def create_progress(quiet: bool = False):
    """Progress bar for a parse, driven by percentages from the parser.

    Returns a ``rich.progress.Progress`` on a terminal, otherwise an object with the
    same ``add_task``/``update`` surface that draws nothing.
    """
    if not _show_live(quiet):
        return _SilentProgress()

    from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

    return Progress(
        TextColumn("{task.description}"),
        BarColumn(bar_width=30),
        TaskProgressColumn(),
        console=_stderr_console(),
        transient=True,
    )


@contextmanager
def spinner(desc: str, quiet: bool = False):
    """Spin while a file decodes; the decoder does not report progress."""
    if not _show_live(quiet):
        yield
        return

    with _stderr_console().status(desc, spinner="dots"):
        yield


def print_status(message: str, style: str = "bold", quiet: bool = False) -> None:
    if not quiet:
        _stderr_console().print(message, style=style, highlight=False)


class _SilentProgress:
    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def add_task(self, description: str, total: float = 100) -> int:
        return 0

    def update(self, task_id: int, completed: float = 0) -> None:
        pass
