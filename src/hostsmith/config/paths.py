"""Ordered-candidate path inference for the hosts and modules directories."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from hostsmith.config.model import AutoConfig, InferredPaths
from hostsmith.constants.discovery import HOSTS_DIR_CANDIDATES, MODULES_DIR_CANDIDATES
from hostsmith.exceptions import ConfigError

logger = logging.getLogger(__name__)


def find_first_path(candidates: Iterable[Path]) -> Path | None:
    """Return the first candidate that exists, or ``None``."""
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def infer_paths(auto: AutoConfig, root: Path) -> InferredPaths:
    """Resolve the hosts and modules directories for *auto* relative to *root*.

    The hosts directory is required once discovery is enabled; the modules
    directory is optional.
    """
    if not auto.enable:
        return InferredPaths()

    if auto.hosts_dir is not None:
        hosts_dir = _under_root(auto.hosts_dir, root)
    else:
        found = find_first_path(root / name for name in HOSTS_DIR_CANDIDATES)
        if found is None:
            candidates = " or ".join(f"./{name}" for name in HOSTS_DIR_CANDIDATES)
            raise ConfigError(f"auto: no hosts directory found under {root}; set auto.hosts_dir or create {candidates}")
        hosts_dir = found

    if auto.modules_dir is not None:
        modules_dir: Path | None = _under_root(auto.modules_dir, root)
    else:
        modules_dir = find_first_path(root / name for name in MODULES_DIR_CANDIDATES)

    logger.debug("Inferred hosts_dir=%s modules_dir=%s", hosts_dir, modules_dir)
    return InferredPaths(hosts_dir=hosts_dir, modules_dir=modules_dir, systems=auto.systems)


def _under_root(path: Path, root: Path) -> Path:
    return path if path.is_absolute() else root / path
