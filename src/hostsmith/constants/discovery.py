"""Constants for filesystem discovery of hosts and class modules."""

from __future__ import annotations

MODULE_SUFFIXES: tuple[str, ...] = (".yaml", ".yml")
DEFAULT_ENTRY_STEM: str = "default"
DEFAULT_ENTRY_FILENAMES: tuple[str, ...] = tuple(f"{DEFAULT_ENTRY_STEM}{suffix}" for suffix in MODULE_SUFFIXES)

# Never hosts: they hold the shared layer.
RESERVED_HOST_ENTRIES: frozenset[str] = frozenset({DEFAULT_ENTRY_STEM, *DEFAULT_ENTRY_FILENAMES})

HOSTS_DIR_CANDIDATES: tuple[str, ...] = ("hosts", "systems")
MODULES_DIR_CANDIDATES: tuple[str, ...] = ("modules", "module", "classes", "class")
