"""Settings loading, path inference and host record parsing.

This package facade re-exports the public names so callers can use
``from hostsmith.config import ...``.
"""

from __future__ import annotations

from hostsmith.config.loader import build_host_spec, build_layer, load_config
from hostsmith.config.model import AutoConfig, HostsmithConfig, InferredPaths, layer_lookup
from hostsmith.config.paths import find_first_path, infer_paths

__all__ = [
    "AutoConfig",
    "HostsmithConfig",
    "InferredPaths",
    "build_host_spec",
    "build_layer",
    "find_first_path",
    "infer_paths",
    "layer_lookup",
    "load_config",
]
