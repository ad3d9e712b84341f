"""Configuration management for sockit."""

from __future__ import annotations

import logging
from dataclasses import asdict, fields
from pathlib import Path

import yaml

from sockit.errors import ConfigError
from sockit.models import SockitConfig

CONFIG_FILE = "sockit.yaml"


def save_config(config: SockitConfig, path: Path) -> Path:
    """Write config as YAML to path. Returns the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(asdict(config), sort_keys=False))
    return path


def load_config(path: Path) -> SockitConfig:
    """Load config from a YAML (or JSON) file."""
    if not path.exists():
        raise FileNotFoundError(f"No config found at {path}")
    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config in {path} must be a mapping")

    known = {f.name for f in fields(SockitConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    try:
        config = SockitConfig(**raw)
        errors = config.validate()
    except (TypeError, AttributeError) as exc:
        raise ConfigError(f"Invalid config values in {path}: {exc}") from exc
    if errors:
        raise ConfigError(f"Invalid config in {path}: {'; '.join(errors)}")
    return config


def find_config(start: Path) -> Path | None:
    """Return the nearest sockit.yaml in start or one of its parents."""
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


def configure_logging(config: SockitConfig, verbose: bool = False) -> None:
    """Set up root logging for command-line use."""
    level = logging.DEBUG if verbose else getattr(logging, config.log_level.upper())
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("sockit").setLevel(level)
