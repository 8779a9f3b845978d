"""Base exception for Hostsmith."""

from __future__ import annotations


class HostsmithError(Exception):
    """Base class for all Hostsmith errors."""
