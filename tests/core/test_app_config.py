"""
Tests for core.config.

Tests YAML configuration loading, defaults and validation.
"""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from core.config import AppConfig, LoggingConfig, default_config_path, load_app_config
from extractors.exceptions import ConfigurationError


class TestLoadAppConfig:
    """Tests for load_app_config."""

    def test_missing_file_uses_defaults(self, tmp_path: Path):
        config = load_app_config(tmp_path / "config.yml")

        assert config.source is None
        assert config.logging.level == "WARNING"
        assert config.logging.log_dir is None
        assert config.discovery.prefer_newest is False
        assert config.discovery.profile_roots == []
        assert config.output.real_flags is False

    def test_empty_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("")

        config = load_app_config(path)

        assert config.discovery.prefer_newest is False

    def test_all_sections(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text(f"""
logging:
  level: debug
  log_dir: {tmp_path / 'logs'}
  max_mb: 1
  backup_count: 2
discovery:
  prefer_newest: true
  profile_roots:
    - {tmp_path / 'Profiles'}
output:
  real_flags: true
""")

        config = load_app_config(path)

        assert config.source == path
        assert config.logging.level_number == logging.DEBUG
        assert config.logging.log_dir == tmp_path / "logs"
        assert config.logging.max_mb == 1
        assert config.logging.backup_count == 2
        assert config.discovery.prefer_newest is True
        assert config.discovery.profile_roots == [tmp_path / "Profiles"]
        assert config.output.real_flags is True

    def test_profile_roots_expand_user(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("discovery:\n  profile_roots: ['~/ff']\n")

        config = load_app_config(path)

        assert config.discovery.profile_roots == [Path.home() / "ff"]

    def test_non_mapping_rejected(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_app_config(path)

    def test_bad_section_rejected(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("discovery: yes\n")

        with pytest.raises(ConfigurationError, match="discovery"):
            load_app_config(path)

    def test_profile_roots_must_be_list(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("discovery:\n  profile_roots: /single/path\n")

        with pytest.raises(ConfigurationError, match="profile_roots"):
            load_app_config(path)

    def test_invalid_yaml_rejected(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("logging: [unclosed\n")

        with pytest.raises(ConfigurationError):
            load_app_config(path)

    @pytest.mark.parametrize("key", ["max_mb", "backup_count"])
    def test_non_integer_size_rejected(self, tmp_path: Path, key):
        path = tmp_path / "config.yml"
        path.write_text(f"logging:\n  {key}: lots\n")

        with pytest.raises(ConfigurationError, match=f"logging.{key} must be an integer"):
            load_app_config(path)

    def test_boolean_size_rejected(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("logging:\n  max_mb: true\n")

        with pytest.raises(ConfigurationError, match="max_mb"):
            load_app_config(path)

    @pytest.mark.parametrize(
        "text, key",
        [
            ("discovery:\n  prefer_newest: 'false'\n", "discovery.prefer_newest"),
            ("output:\n  real_flags: 'no'\n", "output.real_flags"),
            ("output:\n  real_flags: 1\n", "output.real_flags"),
        ],
    )
    def test_quoted_or_numeric_flags_rejected(self, tmp_path: Path, text, key):
        path = tmp_path / "config.yml"
        path.write_text(text)

        with pytest.raises(ConfigurationError, match=f"{key} must be true or false"):
            load_app_config(path)

    def test_unquoted_false_flag_accepted(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("discovery:\n  prefer_newest: false\noutput:\n  real_flags: false\n")

        config = load_app_config(path)

        assert config.discovery.prefer_newest is False
        assert config.output.real_flags is False


class TestLoggingConfig:

    def test_unknown_level_rejected(self):
        with pytest.raises(ConfigurationError):
            LoggingConfig(level="LOUD").level_number

    def test_level_case_insensitive(self):
        assert LoggingConfig(level="info").level_number == logging.INFO


class TestDefaultConfigPath:

    def test_xdg_config_home(self):
        assert default_config_path({"XDG_CONFIG_HOME": "/cfg"}) == Path("/cfg/ffcookies/config.yml")

    def test_home_fallback(self):
        assert default_config_path({}) == Path.home() / ".config" / "ffcookies" / "config.yml"

    def test_dataclass_defaults(self):
        config = AppConfig()

        assert config.logging.level == "WARNING"
        assert config.output.real_flags is False
