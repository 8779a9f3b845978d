"""Filesystem discovery of hosts, the shared layer and class modules."""

from __future__ import annotations

import logging
from pathlib import Path

from hostsmith.config import build_host_spec, build_layer, find_first_path
from hostsmith.constants.discovery import (
    DEFAULT_ENTRY_FILENAMES,
    DEFAULT_ENTRY_STEM,
    MODULE_SUFFIXES,
    RESERVED_HOST_ENTRIES,
)
from hostsmith.exceptions import ConfigError, DuplicateHostError
from hostsmith.io import load_yaml_mapping
from hostsmith.model import EMPTY_LAYER, ConfigLayer, HostSpec
from hostsmith.types import HostClass

logger = logging.getLogger(__name__)


def discover_hosts(hosts_dir: Path) -> dict[str, HostSpec]:
    """Discover host records directly under *hosts_dir*.

    ``name.yaml`` files and ``name/`` directories holding a ``default.yaml``
    entry point become host ``name``. The reserved ``default`` entries hold
    the shared layer and are skipped. Two entries that normalize to the same
    host name raise :class:`DuplicateHostError`.
    """
    if not hosts_dir.is_dir():
        raise ConfigError(f"Hosts directory does not exist or is not a directory: {hosts_dir}")

    sources: dict[str, tuple[Path, Path]] = {}
    for entry in sorted(hosts_dir.iterdir(), key=lambda path: path.name):
        if entry.name in RESERVED_HOST_ENTRIES:
            continue
        resolved = _host_entry(entry)
        if resolved is None:
            logger.debug("Skipping non-host entry: %s", entry)
            continue
        host_name, entry_point = resolved
        if host_name in sources:
            raise DuplicateHostError(
                f"Host {host_name!r} is defined by both {sources[host_name][0]} and {entry}; rename one of them"
            )
        sources[host_name] = (entry, entry_point)

    hosts: dict[str, HostSpec] = {}
    for host_name, (entry, entry_point) in sources.items():
        raw = load_yaml_mapping(entry_point)
        hosts[host_name] = build_host_spec(host_name, raw, str(entry_point), entry_point.parent, path=entry)
        logger.debug("Discovered host %s (%s) from %s", host_name, hosts[host_name].host_class, entry)
    return hosts


def load_shared_layer(hosts_dir: Path) -> ConfigLayer:
    """Load the shared layer from ``hosts_dir/default.yaml``; empty when absent."""
    candidates = [hosts_dir / filename for filename in DEFAULT_ENTRY_FILENAMES]
    candidates += [hosts_dir / DEFAULT_ENTRY_STEM / filename for filename in DEFAULT_ENTRY_FILENAMES]
    found = find_first_path(path for path in candidates if path.is_file())
    if found is None:
        return EMPTY_LAYER
    logger.debug("Loading shared layer from %s", found)
    return build_layer(load_yaml_mapping(found), str(found), found.parent)


def discover_class_modules(modules_dir: Path | None, host_class: HostClass) -> ConfigLayer:
    """Return the auto-loaded layer for *host_class* from *modules_dir*.

    Probes ``{class}.yaml`` then a ``{class}/`` directory with a default
    entry point. The first match becomes the layer's only module reference.
    """
    if modules_dir is None:
        return EMPTY_LAYER

    file_match = find_first_path(
        path for path in (modules_dir / f"{host_class.value}{suffix}" for suffix in MODULE_SUFFIXES) if path.is_file()
    )
    if file_match is not None:
        return ConfigLayer(modules=(file_match,))

    class_dir = modules_dir / host_class.value
    if class_dir.is_dir():
        entry_point = _entry_point(class_dir)
        if entry_point is not None:
            return ConfigLayer(modules=(entry_point,))

    return EMPTY_LAYER


def discover_class_module_set(modules_dir: Path | None) -> dict[HostClass, ConfigLayer]:
    """Discover the auto-loaded layer of every host class."""
    return {host_class: discover_class_modules(modules_dir, host_class) for host_class in HostClass}


def _host_entry(entry: Path) -> tuple[str, Path] | None:
    """Return ``(host_name, entry_point)`` for a host entry, ``None`` otherwise."""
    if entry.is_file():
        for suffix in MODULE_SUFFIXES:
            if entry.name.endswith(suffix) and len(entry.name) > len(suffix):
                return entry.name[: -len(suffix)], entry
        return None
    if entry.is_dir():
        entry_point = _entry_point(entry)
        if entry_point is not None:
            return entry.name, entry_point
    return None


def _entry_point(directory: Path) -> Path | None:
    return find_first_path(path for path in (directory / name for name in DEFAULT_ENTRY_FILENAMES) if path.is_file())
