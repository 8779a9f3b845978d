"""Small shared helpers."""

from .mapping import deep_merge

__all__ = ["deep_merge"]
