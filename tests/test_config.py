"""Tests for configuration file support."""

import sys
import warnings

import pytest

from bxl_tools.config import (
    CHOICES,
    KNOWN_KEYS,
    Config,
    ConfigError,
    _find_project_config,
    _load_toml_file,
    generate_template,
    get_config_paths,
)
from bxl_tools.exceptions import ConfigurationError


def _load_with_warnings(directory):
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        Config.load(directory)
    return [str(w.message) for w in caught]


class TestDefaults:
    """Built-in values used when no file sets them."""

    def test_section_defaults(self):
        """Each section starts from its documented default."""
        config = Config()
        assert config.defaults.format == "table"
        assert config.defaults.quiet is False
        assert config.parse.file_type == "auto"
        assert config.parse.min_severity == "information"
        assert config.parse.show_progress is True
        assert config.decode.output_suffix == ".txt"

    def test_defaults_are_valid_choices(self):
        """Every restricted default is one of its own choices."""
        config = Config()
        for key, choices in CHOICES.items():
            section, attr = key.split(".")
            assert getattr(getattr(config, section), attr) in choices

    def test_known_keys_match_dataclasses(self):
        """Every known key is a field on its section."""
        config = Config()
        for section, keys in KNOWN_KEYS.items():
            for key in keys:
                assert hasattr(getattr(config, section), key)


class TestFindProjectConfig:
    """Project config discovery."""

    def test_hidden_name_preferred(self, tmp_path):
        """.bxl-tools.toml wins over bxl-tools.toml in the same directory."""
        (tmp_path / "bxl-tools.toml").write_text("[defaults]\n")
        hidden = tmp_path / ".bxl-tools.toml"
        hidden.write_text("[defaults]\n")

        assert _find_project_config(tmp_path) == hidden

    def test_walks_up_from_library_folder(self, tmp_path):
        """A config in a parent directory is found."""
        config_file = tmp_path / "bxl-tools.toml"
        config_file.write_text("[parse]\n")
        nested = tmp_path / "libraries" / "ti"
        nested.mkdir(parents=True)

        assert _find_project_config(nested) == config_file

    def test_stops_at_repository_root(self, tmp_path):
        """Configs above a .git directory are ignored."""
        repo = tmp_path / "repo"
        (repo / ".git").mkdir(parents=True)
        (tmp_path / ".bxl-tools.toml").write_text("[defaults]\n")

        assert _find_project_config(repo) is None


class TestLoadToml:
    """Reading TOML files."""

    def test_valid(self, tmp_path):
        """Values keep their TOML types."""
        path = tmp_path / "config.toml"
        path.write_text('[parse]\nfile_type = "text"\nshow_progress = false\n')

        assert _load_toml_file(path) == {"parse": {"file_type": "text", "show_progress": False}}

    def test_invalid(self, tmp_path):
        """Broken TOML raises ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("[parse\nfile_type = ")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            _load_toml_file(path)

    def test_missing(self, tmp_path):
        """An unreadable file raises ConfigError."""
        with pytest.raises(ConfigError, match="Cannot read"):
            _load_toml_file(tmp_path / "nonexistent.toml")


class TestConfigLoad:
    """Merging the config layers."""

    def test_no_files(self, isolated_config):
        """Without files every value comes from the defaults."""
        config = Config.load(isolated_config)
        assert config == Config()
        assert config.get_source("parse.min_severity") == "default"

    def test_project_file(self, isolated_config):
        """Project values replace defaults and record their source."""
        path = isolated_config / ".bxl-tools.toml"
        path.write_text('[parse]\nmin_severity = "warning"\n\n[decode]\noutput_suffix = ".xlr"\n')

        config = Config.load(isolated_config)
        assert config.parse.min_severity == "warning"
        assert config.decode.output_suffix == ".xlr"
        assert config.get_source("parse.min_severity") == str(path)
        assert config.get_source("parse.file_type") == "default"

    def test_project_overrides_user(self, isolated_config, monkeypatch):
        """Project values win; user values fill the gaps."""
        user_config = isolated_config / "user-config.toml"
        user_config.write_text('[defaults]\nformat = "json"\nquiet = true\n')
        (isolated_config / ".bxl-tools.toml").write_text('[defaults]\nformat = "table"\n')
        monkeypatch.setattr("bxl_tools.config.USER_CONFIG_PATH", user_config)

        config = Config.load(isolated_config)
        assert config.defaults.format == "table"
        assert config.defaults.quiet is True
        assert config.get_source("defaults.quiet") == str(user_config)
        assert config.get_source("defaults.format").endswith(".bxl-tools.toml")

    def test_invalid_choice(self, isolated_config):
        """Values outside the accepted choices are rejected."""
        (isolated_config / ".bxl-tools.toml").write_text('[parse]\nfile_type = "zip"\n')

        with pytest.raises(ConfigurationError, match="Invalid value for 'parse.file_type'"):
            Config.load(isolated_config)

    def test_unknown_section_warns(self, isolated_config):
        """Unknown sections are reported and skipped."""
        (isolated_config / ".bxl-tools.toml").write_text('[route]\nstrategy = "fast"\n')

        messages = _load_with_warnings(isolated_config)
        assert len(messages) == 1
        assert "Unknown config section 'route'" in messages[0]

    def test_unknown_key_warns(self, isolated_config):
        """Unknown keys are reported and the rest of the section still applies."""
        (isolated_config / ".bxl-tools.toml").write_text(
            '[parse]\nstrict = true\nfile_type = "text"\n'
        )

        messages = _load_with_warnings(isolated_config)
        assert len(messages) == 1
        assert "parse.strict" in messages[0]
        assert Config.load(isolated_config).parse.file_type == "text"


class TestGenerateTemplate:
    """The commented template written by 'config --init'."""

    def test_parses_to_empty_sections(self):
        """Every option is commented out, leaving only the section headers."""
        if sys.version_info >= (3, 11):
            import tomllib
        else:
            import tomli as tomllib

        assert tomllib.loads(generate_template()) == {"defaults": {}, "parse": {}, "decode": {}}

    def test_mentions_every_key(self):
        """Each known key appears in the template."""
        template = generate_template()
        for keys in KNOWN_KEYS.values():
            for key in keys:
                assert f"# {key} = " in template


class TestGetConfigPaths:
    """Reporting which files would be read."""

    def test_missing_files(self, isolated_config):
        """Nothing is reported when no files exist."""
        assert get_config_paths() == {"user": None, "project": None}

    def test_existing_files(self, isolated_config, monkeypatch):
        """Existing user and project files are reported."""
        project_config = isolated_config / "bxl-tools.toml"
        project_config.write_text("[defaults]\n")
        user_config = isolated_config / "user.toml"
        user_config.write_text("[defaults]\n")
        monkeypatch.setattr("bxl_tools.config.USER_CONFIG_PATH", user_config)

        assert get_config_paths() == {"user": user_config, "project": project_config}
