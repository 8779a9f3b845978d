"""YAML file loading helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from hostsmith.exceptions import ConfigError


def load_yaml_mapping(path: Path) -> dict[str, Any]:
    """Load *path* as a YAML mapping; an empty document is an empty mapping."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML file at {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"File at {path} must be a YAML mapping, got {type(raw).__name__}")
    return raw
