"""
Inspect or create bxl-tools configuration files.

Usage:
    bxl-tools config                  Effective settings and where each came from
    bxl-tools config --init           Write a commented template to ./.bxl-tools.toml
    bxl-tools config --init --user    Write the template to the user config instead
    bxl-tools config --paths          List the files that are searched
    bxl-tools config get parse.file_type
"""

import argparse
import sys
from pathlib import Path

from bxl_tools.config import (
    CONFIG_FILENAMES,
    KNOWN_KEYS,
    USER_CONFIG_PATH,
    Config,
    ConfigError,
    generate_template,
    get_config_paths,
)
from bxl_tools.exceptions import ConfigurationError


def main(argv: list[str] | None = None) -> int:
    """Main entry point for config command."""
    parser = argparse.ArgumentParser(
        prog="bxl-tools config",
        description="Inspect or create bxl-tools configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--show", action="store_true", help="Show settings with their source")
    mode.add_argument("--init", action="store_true", help="Write a template config file")
    mode.add_argument("--paths", action="store_true", help="List searched config files")
    parser.add_argument("action", nargs="?", choices=["get"])
    parser.add_argument("key", nargs="?", help="Setting as section.key")
    parser.add_argument("--user", action="store_true", help=f"--init writes {USER_CONFIG_PATH}")

    args = parser.parse_args(argv)

    try:
        if args.init:
            return _init_config(USER_CONFIG_PATH if args.user else Path.cwd() / CONFIG_FILENAMES[0])
        if args.paths:
            return _show_paths()
        if args.action == "get":
            if not args.key:
                print("Error: 'get' requires a key argument", file=sys.stderr)
                return 1
            return _get_config(args.key)
        return _show_config()
    except (ConfigError, ConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _format_value(value) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def _show_config() -> int:
    config = Config.load()

    print("# Effective bxl-tools configuration")
    for section, keys in KNOWN_KEYS.items():
        values = getattr(config, section)
        print(f"\n[{section}]")
        for key in sorted(keys):
            source = config.get_source(f"{section}.{key}")
            origin = source if source == "default" else Path(source).name
            print(f"{key} = {_format_value(getattr(values, key))}  # from: {origin}")
    return 0


def _show_paths() -> int:
    paths = get_config_paths()

    print("Config file paths:\n")
    print(f"User config: {USER_CONFIG_PATH}")
    print(f"  Status: {'exists' if paths['user'] else 'not found'}\n")
    print(f"Project config search: {', '.join(CONFIG_FILENAMES)}")
    if paths["project"]:
        print(f"  Found: {paths['project']}")
    else:
        print("  Status: not found")
    return 0


def _init_config(target: Path) -> int:
    if target.exists():
        print(f"Error: Config file already exists: {target}", file=sys.stderr)
        return 1

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generate_template())
    except OSError as e:
        print(f"Error writing config file: {e}", file=sys.stderr)
        return 1

    print(f"Created config template: {target}")
    return 0


def _get_config(key: str) -> int:
    section, _, attr = key.partition(".")
    if not attr or "." in attr:
        print(f"Error: Invalid key format '{key}'. Use 'section.key' format.", file=sys.stderr)
        return 1
    if section not in KNOWN_KEYS:
        print(f"Error: Unknown config section '{section}'", file=sys.stderr)
        return 1
    if attr not in KNOWN_KEYS[section]:
        print(f"Error: Unknown key '{attr}' in section '{section}'", file=sys.stderr)
        return 1

    config = Config.load()
    value = getattr(getattr(config, section), attr)
    print(str(value).lower() if isinstance(value, bool) else value)

    source = config.get_source(key)
    if source != "default":
        print(f"# source: {source}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
