"""Shared exception hierarchy for Hostsmith."""

from __future__ import annotations

from .base import HostsmithError
from .config import ConfigError, DuplicateHostError, MissingBuilderError

__all__ = [
    "ConfigError",
    "DuplicateHostError",
    "HostsmithError",
    "MissingBuilderError",
]
