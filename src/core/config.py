from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from extractors.exceptions import ConfigurationError

CONFIG_FILE_NAME = "config.yml"


@dataclass(slots=True)
class LoggingConfig:
    """Logging configuration from config.yml."""

    level: str = "WARNING"
    log_dir: Optional[Path] = None
    max_mb: int = 5
    backup_count: int = 3

    @property
    def level_number(self) -> int:
        value = logging.getLevelName(self.level.upper())
        if not isinstance(value, int):
            raise ConfigurationError(f"Unknown logging level: {self.level!r}")
        return value


@dataclass(slots=True)
class DiscoveryConfig:
    """Profile discovery configuration from config.yml."""

    prefer_newest: bool = False  # Pick the most recently modified store
    profile_roots: List[Path] = field(default_factory=list)  # Searched before built-in roots


@dataclass(slots=True)
class OutputConfig:
    """Cookie file rendering configuration from config.yml."""

    real_flags: bool = False  # Render isSecure instead of constant FALSE


@dataclass(slots=True)
class AppConfig:
    """Top-level configuration resolved from disk."""

    source: Optional[Path] = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def default_config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return ``$XDG_CONFIG_HOME/ffcookies/config.yml`` (``~/.config`` fallback)."""
    env = os.environ if environ is None else environ
    config_home = env.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "ffcookies" / CONFIG_FILE_NAME


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            content = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(content, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at the top level.")
    return content


def _section(overrides: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = overrides.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Config section '{name}' must be a mapping.")
    return section


def _get_int(section: Dict[str, Any], key: str, default: int, where: str) -> int:
    value = section.get(key, default)
    if isinstance(value, bool):
        raise ConfigurationError(f"{where}.{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{where}.{key} must be an integer, got {value!r}") from exc


def _get_bool(section: Dict[str, Any], key: str, default: bool, where: str) -> bool:
    value = section.get(key, default)
    # Quoted YAML strings such as 'false' are not booleans
    if not isinstance(value, bool):
        raise ConfigurationError(f"{where}.{key} must be true or false, got {value!r}")
    return value


def load_app_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration from disk, providing sensible defaults.

    A missing file yields the defaults; a malformed one raises
    ``ConfigurationError``.
    """

    config_path = path if path is not None else default_config_path()
    config_overrides = _load_yaml(config_path)

    logging_cfg = _section(config_overrides, "logging")
    log_dir = logging_cfg.get("log_dir")
    logging_config = LoggingConfig(
        level=str(logging_cfg.get("level", "WARNING")),
        log_dir=Path(log_dir).expanduser() if log_dir else None,
        max_mb=_get_int(logging_cfg, "max_mb", 5, "logging"),
        backup_count=_get_int(logging_cfg, "backup_count", 3, "logging"),
    )

    discovery_cfg = _section(config_overrides, "discovery")
    roots = discovery_cfg.get("profile_roots") or []
    if not isinstance(roots, list):
        raise ConfigurationError("discovery.profile_roots must be a list of paths.")
    discovery_config = DiscoveryConfig(
        prefer_newest=_get_bool(discovery_cfg, "prefer_newest", False, "discovery"),
        profile_roots=[Path(str(root)).expanduser() for root in roots],
    )

    output_cfg = _section(config_overrides, "output")
    output_config = OutputConfig(
        real_flags=_get_bool(output_cfg, "real_flags", False, "output"),
    )

    return AppConfig(
        source=config_path if config_overrides else None,
        logging=logging_config,
        discovery=discovery_config,
        output=output_config,
    )
