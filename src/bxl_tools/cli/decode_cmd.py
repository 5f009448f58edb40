"""
Decode binary BXL files to plain text.

Usage:
    bxl-tools decode part.bxl                 # Print decoded text to stdout
    bxl-tools decode part.bxl -o part.txt     # Write to a file
    bxl-tools decode parts/ --all             # Decode every .bxl file in a directory

In directory mode each file is written next to its source with the configured
suffix (default ``.txt``). Existing outputs are skipped unless --force is given.

Decoded text is written back one byte per character (Latin-1), so the output holds
exactly the bytes the compressor was given. Files read as text are written as UTF-8.

Exit Codes:
    0 - Success
    1 - File missing, unreadable or command failure
"""

import argparse
import sys
from pathlib import Path

from bxl_tools.config import Config, ConfigError
from bxl_tools.core.bxl_file import BxlFileType, decode_file, is_binary
from bxl_tools.exceptions import BxlToolsError

from .progress import print_status, spinner
from .utils import collect_files, configure_logging, print_error


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the decode command."""
    parser = argparse.ArgumentParser(
        prog="bxl-tools decode",
        description="Decode binary BXL files to text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("path", help="Path to a .bxl file, or a directory with --all")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument(
        "--all",
        action="store_true",
        help="Decode every .bxl file in the directory",
    )
    parser.add_argument(
        "--type",
        dest="file_type",
        choices=["auto", "binary", "text"],
        help="How to read the input (default: from config, else auto)",
    )
    parser.add_argument("--force", action="store_true", help="Overwrite existing outputs")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress status output")
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
    quiet = args.quiet or config.defaults.quiet
    path = Path(args.path)

    if path.is_dir():
        if not args.all:
            print(f"Error: {path} is a directory; use --all to decode its files", file=sys.stderr)
            return 1
        return _decode_directory(path, file_type, config.decode.output_suffix, args.force, quiet)

    try:
        with spinner(f"Decoding {path.name}...", quiet=quiet):
            text = decode_file(path, file_type)
    except BxlToolsError as e:
        print_error(e, verbose=verbose)
        return 1

    data = text.encode(_output_encoding(path, file_type))
    if args.output:
        Path(args.output).write_bytes(data)
        print_status(f"Wrote {args.output}", quiet=quiet)
    else:
        sys.stdout.flush()
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    return 0


def _output_encoding(path: Path, file_type: BxlFileType) -> str:
    return "latin-1" if is_binary(path, file_type) else "utf-8"


def _decode_directory(
    directory: Path, file_type: BxlFileType, suffix: str, force: bool, quiet: bool
) -> int:
    failures = 0
    written = 0

    for source in collect_files([str(directory)], suffixes=(".bxl",)):
        target = source.with_suffix(suffix)
        if target.exists() and not force:
            print_status(f"Skipping {source.name}: {target.name} exists", style="dim", quiet=quiet)
            continue

        try:
            with spinner(f"Decoding {source.name}...", quiet=quiet):
                text = decode_file(source, file_type)
        except BxlToolsError as e:
            print_error(e)
            failures += 1
            continue

        target.write_bytes(text.encode(_output_encoding(source, file_type)))
        written += 1

    print_status(f"Decoded {written} file(s)", quiet=quiet)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
