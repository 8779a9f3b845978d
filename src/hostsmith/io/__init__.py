"""Shared file I/O helpers."""

from .files import load_yaml_mapping

__all__ = ["load_yaml_mapping"]
