"""
Parse BXL files and report their diagnostics.

Usage:
    bxl-tools check part.bxl                       # Parse one file
    bxl-tools check parts/                         # Every .bxl/.xlr file in a directory
    bxl-tools check parts/ --min-severity warning  # Hide information entries
    bxl-tools check part.xlr --format json         # Machine-readable output

Exit Codes:
    0 - All files parsed without errors (warnings may be present)
    1 - At least one file has errors, or a file could not be read
"""

import argparse
import json
import sys
from pathlib import Path

from bxl_tools.config import Config, ConfigError
from bxl_tools.core.bxl_file import BxlFileType, read_file
from bxl_tools.core.logs import Logs, LogSeverity
from bxl_tools.exceptions import BxlToolsError
from bxl_tools.progress import create_cli_adapter

from .utils import collect_files, configure_logging, print_error

SEVERITY_STYLES = {
    LogSeverity.INFORMATION: "blue",
    LogSeverity.WARNING: "yellow",
    LogSeverity.ERROR: "red",
    LogSeverity.INTERNAL_ERROR: "bold red",
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the check command."""
    parser = argparse.ArgumentParser(
        prog="bxl-tools check",
        description="Parse BXL files and report diagnostics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("paths", nargs="+", help="BXL/XLR files or directories")
    parser.add_argument(
        "--min-severity",
        choices=["information", "warning", "error"],
        help="Lowest severity to show (default: from config, else information)",
    )
    parser.add_argument(
        "--type",
        dest="file_type",
        choices=["auto", "binary", "text"],
        help="How to read the input (default: from config, else auto)",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Hide progress bars")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    try:
        config = Config.load()
    except (ConfigError, BxlToolsError) as e:
        print_error(e)
        return 1

    verbose = args.verbose or config.defaults.verbose
    configure_logging(verbose)

    min_severity = LogSeverity.from_string(args.min_severity or config.parse.min_severity)
    file_type = BxlFileType.from_string(args.file_type or config.parse.file_type)
    quiet = args.quiet or config.defaults.quiet or not config.parse.show_progress

    files = collect_files(args.paths)
    if not files:
        print("Error: No .bxl or .xlr files found", file=sys.stderr)
        return 1

    failed = False
    results = []

    for path in files:
        try:
            with create_cli_adapter(quiet=quiet, description=f"Parsing {path.name}...") as (
                _,
                callback,
            ):
                _, logs = read_file(path, file_type, progress=callback)
        except BxlToolsError as e:
            print_error(e, verbose=verbose)
            failed = True
            continue

        failed = failed or logs.has_errors
        results.append((path, logs))

    if args.format == "json":
        print(json.dumps([_to_json(path, logs, min_severity) for path, logs in results], indent=2))
    else:
        for path, logs in results:
            _print_logs(path, logs, min_severity)

    return 1 if failed else 0


def _to_json(path: Path, logs: Logs, min_severity: LogSeverity) -> dict:
    return {
        "file": str(path),
        "summary": logs.summary(),
        "entries": [entry.to_dict() for entry in logs.filter(min_severity)],
    }


def _print_logs(path: Path, logs: Logs, min_severity: LogSeverity) -> None:
    from rich.console import Console
    from rich.markup import escape

    console = Console(highlight=False)
    status = "[red]FAILED[/red]" if logs.has_errors else "[green]OK[/green]"
    console.print(
        f"[bold]{escape(path.name)}[/bold] {status} "
        f"({logs.error_count} errors, {logs.warning_count} warnings)"
    )

    for entry in logs.filter(min_severity):
        style = SEVERITY_STYLES[entry.severity]
        console.print(f"  [{style}]{entry.severity.value}[/{style}] {escape(entry.message)}")


if __name__ == "__main__":
    sys.exit(main())
