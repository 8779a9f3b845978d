"""Configuration-related exceptions."""

from __future__ import annotations

from hostsmith.exceptions.base import HostsmithError


class ConfigError(HostsmithError, ValueError):
    """Raised when host configuration is invalid."""


class DuplicateHostError(ConfigError):
    """Raised when two sources define the same host name."""


class MissingBuilderError(ConfigError):
    """Raised when a host's class needs a builder provider that is not available."""
