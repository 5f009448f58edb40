"""
Configuration file support for bxl-tools.

Settings are layered, later layers winning:

1. Built-in defaults (the dataclasses below)
2. User config: ~/.config/bxl-tools/config.toml
3. Project config: .bxl-tools.toml or bxl-tools.toml, searched upward from the
   working directory until a .git directory is reached

Command-line flags override all of them.
"""

import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bxl_tools.exceptions import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Project config names, in order of preference
CONFIG_FILENAMES = [".bxl-tools.toml", "bxl-tools.toml"]

USER_CONFIG_PATH = Path.home() / ".config" / "bxl-tools" / "config.toml"

# Section -> keys accepted in config files
KNOWN_KEYS = {
    "defaults": {"format", "verbose", "quiet"},
    "parse": {"file_type", "min_severity", "show_progress"},
    "decode": {"output_suffix"},
}

# Keys restricted to a fixed set of values
CHOICES = {
    "defaults.format": ("table", "json"),
    "parse.file_type": ("auto", "binary", "text"),
    "parse.min_severity": ("information", "warning", "error"),
}


@dataclass
class DefaultsConfig:
    """Options shared by every command."""

    format: str = "table"
    verbose: bool = False
    quiet: bool = False


@dataclass
class ParseConfig:
    """Options for reading and checking BXL files."""

    file_type: str = "auto"
    min_severity: str = "information"
    show_progress: bool = True


@dataclass
class DecodeConfig:
    """Options for the decode command."""

    output_suffix: str = ".txt"


@dataclass
class Config:
    """Effective configuration after all layers are merged."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    parse: ParseConfig = field(default_factory=ParseConfig)
    decode: DecodeConfig = field(default_factory=DecodeConfig)

    # "section.key" -> file that set it
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load the user config, then the nearest project config above ``start_dir``.

        Raises:
            ConfigError: If a config file cannot be read or is not valid TOML
            ConfigurationError: If a value is not one of the accepted choices
        """
        config = cls()
        layers = [
            USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
            _find_project_config(start_dir or Path.cwd()),
        ]
        for path in layers:
            if path is not None:
                _merge_config(config, _load_toml_file(path), str(path))
        return config

    def get_source(self, key: str) -> str:
        """File that set ``section.key``, or ``"default"``."""
        return self._sources.get(key, "default")


class ConfigError(Exception):
    """A config file could not be read or parsed."""


def _find_project_config(start_dir: Path) -> Path | None:
    """Walk up from ``start_dir`` looking for a project config, stopping at the repo root."""
    for directory in (start_dir.resolve(), *start_dir.resolve().parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        if (directory / ".git").exists():
            return None
    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _merge_config(config: Config, data: dict[str, Any], source: str) -> None:
    for section, values in data.items():
        known = KNOWN_KEYS.get(section)
        if known is None:
            warnings.warn(f"Unknown config section '{section}' in {source}", stacklevel=3)
            continue

        target = getattr(config, section)
        for key, value in values.items():
            name = f"{section}.{key}"
            if key not in known:
                warnings.warn(f"Unknown config key '{name}' in {source}", stacklevel=3)
                continue
            _check_choice(name, value, source)
            setattr(target, key, value)
            config._sources[name] = source


def _check_choice(key: str, value: Any, source: str) -> None:
    choices = CHOICES.get(key)
    if choices is not None and value not in choices:
        raise ConfigurationError(
            f"Invalid value for '{key}': {value!r}",
            context={"file": source, "key": key},
            suggestions=[f"Use one of: {', '.join(choices)}"],
        )


def generate_template() -> str:
    """Commented config file listing every option with its default."""
    return """# bxl-tools configuration file
# Save as .bxl-tools.toml in a project, or as ~/.config/bxl-tools/config.toml

[defaults]
# Output format for the summary command: table, json
# format = "table"
# Debug logging on stderr, as with --verbose
# verbose = false
# Hide progress bars and status messages
# quiet = false

[parse]
# How files are read: auto (.xlr is text, anything else binary), binary, text
# file_type = "auto"
# Lowest severity listed by the check command: information, warning, error
# min_severity = "information"
# show_progress = true

[decode]
# Suffix of files written by 'decode --all'
# output_suffix = ".txt"
"""


def get_config_paths() -> dict[str, Path | None]:
    """Config files that ``Config.load()`` would read from the working directory."""
    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": _find_project_config(Path.cwd()),
    }
