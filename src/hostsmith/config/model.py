"""Settings data model for host resolution."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hostsmith.model import EMPTY_LAYER, ConfigLayer, HostSpec, LayerFn, empty_layer_fn


@dataclass(frozen=True)
class AutoConfig:
    """Filesystem auto-discovery settings."""

    enable: bool = False
    hosts_dir: Path | None = None
    modules_dir: Path | None = None
    systems: tuple[str, ...] | None = None


@dataclass(frozen=True)
class InferredPaths:
    """Directories resolved from :class:`AutoConfig`; all ``None`` when discovery is off."""

    hosts_dir: Path | None = None
    modules_dir: Path | None = None
    systems: tuple[str, ...] | None = None


@dataclass(frozen=True)
class HostsmithConfig:
    """Resolved top-level settings.

    ``shared`` is the explicit shared layer (``hosts.default`` in the
    settings file). ``per_class`` and ``per_arch`` are called with a single
    class or arch value and return a layer.
    """

    root: Path = Path(".")
    auto: AutoConfig = AutoConfig()
    hosts: Mapping[str, HostSpec] = field(default_factory=dict)
    shared: ConfigLayer | None = None
    per_class: LayerFn = empty_layer_fn
    per_arch: LayerFn = empty_layer_fn


def layer_lookup(layers: Mapping[Any, ConfigLayer]) -> LayerFn:
    """Build a layer function from a static mapping; missing keys give an empty layer.

    Keys compare by their string value, so ``"nixos"`` and ``HostClass.NIXOS``
    select the same layer.
    """
    frozen = {str(key): layer for key, layer in layers.items()}

    def lookup(key: Any) -> ConfigLayer:
        return frozen.get(str(key), EMPTY_LAYER)

    return lookup
