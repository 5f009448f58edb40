"""
Quick overview of a BXL file.

Usage:
    bxl-tools summary part.bxl
    bxl-tools summary part.bxl --format json

Shows how many entries each collection holds, the components with their
footprints, and a count of log entries by severity.
"""

import argparse
import json
import sys
from pathlib import Path

from bxl_tools.config import Config, ConfigError
from bxl_tools.core.bxl_file import BxlFileType, read_file
from bxl_tools.core.logs import Logs
from bxl_tools.exceptions import BxlToolsError
from bxl_tools.progress import create_cli_adapter
from bxl_tools.schema.document import BxlDocument

from .utils import configure_logging, print_error


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the summary command."""
    parser = argparse.ArgumentParser(
        prog="bxl-tools summary",
        description="Quick BXL file overview",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("file", help="Path to .bxl or .xlr file")
    parser.add_argument(
        "--format",
        choices=["table", "json"],
        help="Output format (default: from config, else table)",
    )
    parser.add_argument(
        "--type",
        dest="file_type",
        choices=["auto", "binary", "text"],
        help="How to read the input (default: from config, else auto)",
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

    file_type = BxlFileType.from_string(args.file_type or config.parse.file_type)
    output_format = args.format or config.defaults.format
    quiet = args.quiet or config.defaults.quiet or not config.parse.show_progress
    path = Path(args.file)

    try:
        with create_cli_adapter(quiet=quiet, description=f"Parsing {path.name}...") as (
            _,
            callback,
        ):
            doc, logs = read_file(path, file_type, progress=callback)
    except BxlToolsError as e:
        print_error(e, verbose=verbose)
        return 1

    summary = gather_summary(path, doc, logs)
    if output_format == "json":
        print(json.dumps(summary, indent=2))
    else:
        print_summary(summary)
    return 0


def gather_summary(path: Path, doc: BxlDocument, logs: Logs) -> dict:
    """Collect the summary information for one parsed file."""
    return {
        "file": path.name,
        "path": str(path),
        "counts": doc.counts(),
        "components": [
            {
                "name": c.name,
                "pattern": c.pattern_name,
                "pins": c.number_of_pins,
                "parts": c.num_parts,
            }
            for c in doc.components
        ],
        "logs": logs.summary(),
    }


def print_summary(summary: dict) -> None:
    from rich.console import Console
    from rich.table import Table

    console = Console()
    console.print(f"\n[bold]BXL Summary: {summary['file']}[/bold]\n")

    counts = Table(title="Collections", show_header=False)
    counts.add_column("Collection", style="dim")
    counts.add_column("Entries", justify="right")
    for name, count in summary["counts"].items():
        if count:
            counts.add_row(name.replace("_", " ").capitalize(), str(count))
    console.print(counts)

    if summary["components"]:
        components = Table(title="Components")
        components.add_column("Name", style="cyan")
        components.add_column("Pattern")
        components.add_column("Pins", justify="right")
        components.add_column("Parts", justify="right")
        for c in summary["components"]:
            components.add_row(c["name"], c["pattern"] or "-", str(c["pins"]), str(c["parts"]))
        console.print(components)

    by_severity = summary["logs"]["by_severity"]
    errors = by_severity["error"] + by_severity["internal_error"]
    console.print(
        f"\nLog: [red]{errors}[/red] errors, [yellow]{by_severity['warning']}[/yellow] warnings, "
        f"[blue]{by_severity['information']}[/blue] information"
    )


if __name__ == "__main__":
    sys.exit(main())
