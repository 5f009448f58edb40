"""
Command-line interface for bxl-tools.

Provides CLI commands via the `bxl-tools` command:

    bxl-tools decode <file>      - Decode a binary BXL file to text
    bxl-tools check <paths>      - Parse files and report diagnostics
    bxl-tools summary <file>     - Show collection counts and components
    bxl-tools config             - Show or initialize configuration

Examples:
    bxl-tools decode LM358.bxl -o LM358.txt
    bxl-tools decode libraries/ --all
    bxl-tools check libraries/ --min-severity warning
    bxl-tools summary LM358.bxl --format json
    bxl-tools config --init
"""

import argparse
from typing import List, Optional

from bxl_tools import __version__

__all__ = ["main"]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for bxl-tools CLI."""
    parser = argparse.ArgumentParser(
        prog="bxl-tools",
        description="BXL/XLR CAD interchange file toolkit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"bxl-tools {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    file_types = ["auto", "binary", "text"]

    # Decode subcommand
    decode_parser = subparsers.add_parser("decode", help="Decode binary BXL files to text")
    decode_parser.add_argument("path", help="Path to a .bxl file, or a directory with --all")
    decode_parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    decode_parser.add_argument("--all", action="store_true", help="Decode a whole directory")
    decode_parser.add_argument("--type", dest="file_type", choices=file_types)
    decode_parser.add_argument("--force", action="store_true", help="Overwrite existing outputs")
    decode_parser.add_argument("-q", "--quiet", action="store_true")
    decode_parser.add_argument("-v", "--verbose", action="store_true")

    # Check subcommand
    check_parser = subparsers.add_parser("check", help="Parse files and report diagnostics")
    check_parser.add_argument("paths", nargs="+", help="BXL/XLR files or directories")
    check_parser.add_argument("--min-severity", choices=["information", "warning", "error"])
    check_parser.add_argument("--type", dest="file_type", choices=file_types)
    check_parser.add_argument("--format", choices=["text", "json"], default="text")
    check_parser.add_argument("-q", "--quiet", action="store_true")
    check_parser.add_argument("-v", "--verbose", action="store_true")

    # Summary subcommand
    summary_parser = subparsers.add_parser("summary", help="Quick BXL file overview")
    summary_parser.add_argument("file", help="Path to .bxl or .xlr file")
    summary_parser.add_argument("--format", choices=["table", "json"])
    summary_parser.add_argument("--type", dest="file_type", choices=file_types)
    summary_parser.add_argument("-q", "--quiet", action="store_true")
    summary_parser.add_argument("-v", "--verbose", action="store_true")

    # Config subcommand
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_group = config_parser.add_mutually_exclusive_group()
    config_group.add_argument("--show", action="store_true", help="Show effective config")
    config_group.add_argument("--init", action="store_true", help="Create template config")
    config_group.add_argument("--paths", action="store_true", help="Show config file paths")
    config_parser.add_argument("action", nargs="?", choices=["get"])
    config_parser.add_argument("key", nargs="?", help="Config key (e.g., parse.min_severity)")
    config_parser.add_argument("--user", action="store_true", help="Use user config for --init")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "decode":
        from .decode_cmd import main as decode_cmd

        # Convert args back to argv for the subcommand
        sub_argv = [args.path]
        if args.output:
            sub_argv.extend(["--output", args.output])
        if args.all:
            sub_argv.append("--all")
        sub_argv.extend(_common_flags(args))
        if args.force:
            sub_argv.append("--force")
        return decode_cmd(sub_argv)

    elif args.command == "check":
        from .check_cmd import main as check_cmd

        sub_argv = list(args.paths)
        if args.min_severity:
            sub_argv.extend(["--min-severity", args.min_severity])
        if args.format != "text":
            sub_argv.extend(["--format", args.format])
        sub_argv.extend(_common_flags(args))
        return check_cmd(sub_argv)

    elif args.command == "summary":
        from .summary_cmd import main as summary_cmd

        sub_argv = [args.file]
        if args.format:
            sub_argv.extend(["--format", args.format])
        sub_argv.extend(_common_flags(args))
        return summary_cmd(sub_argv)

    elif args.command == "config":
        from .config_cmd import main as config_cmd

        sub_argv = []
        if args.show:
            sub_argv.append("--show")
        if args.init:
            sub_argv.append("--init")
        if args.paths:
            sub_argv.append("--paths")
        if args.action:
            sub_argv.append(args.action)
        if args.key:
            sub_argv.append(args.key)
        if args.user:
            sub_argv.append("--user")
        return config_cmd(sub_argv)

    return 0


def _common_flags(args) -> list[str]:
    flags = []
    if args.file_type:
        flags.extend(["--type", args.file_type])
    if args.quiet:
        flags.append("--quiet")
    if args.verbose:
        flags.append("--verbose")
    return flags
