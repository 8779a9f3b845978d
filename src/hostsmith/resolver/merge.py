"""Layered merging of shared, per-class, per-arch, class-module and host layers.

Precedence, lowest to highest::

    shared < per-class < per-arch < auto class modules < host

Modules are concatenated in that order and never deduplicated. Special args
are overlaid in that order with :func:`deep_merge`, so a host's own keys
win every conflict and the shared layer never overrides anything.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from hostsmith.exceptions import ConfigError
from hostsmith.model import ConfigLayer, HostRecord, HostSpec, LayerFn
from hostsmith.utils import deep_merge

logger = logging.getLogger(__name__)


def merge_layers(*layers: ConfigLayer) -> ConfigLayer:
    """Merge *layers* in order; later layers win special-args conflicts."""
    modules = tuple(module for layer in layers for module in layer.modules)
    special_args: dict[str, Any] = {}
    for layer in layers:
        special_args = deep_merge(special_args, layer.special_args)
    return ConfigLayer(modules=modules, special_args=special_args)


def merge_host(
    host: HostSpec,
    shared: ConfigLayer,
    class_layer_fn: LayerFn,
    arch_layer_fn: LayerFn,
    auto_class_layer: ConfigLayer,
) -> HostRecord:
    """Merge every layer that applies to *host* into a :class:`HostRecord`.

    A pure host keeps exactly its own layer; no other source contributes.
    """
    if host.pure:
        logger.debug("Host %s is pure; skipping shared, class and arch layers", host.name)
        return HostRecord(spec=host, modules=tuple(host.modules), special_args=dict(host.special_args))

    merged = merge_layers(
        shared,
        coerce_layer(class_layer_fn(host.host_class), f"per_class({host.host_class})"),
        coerce_layer(arch_layer_fn(host.arch), f"per_arch({host.arch})"),
        auto_class_layer,
        host.layer,
    )
    return HostRecord(spec=host, modules=merged.modules, special_args=merged.special_args)


def coerce_layer(value: Any, origin: str) -> ConfigLayer:
    """Accept a :class:`ConfigLayer` or a ``{modules, special_args}`` mapping."""
    if isinstance(value, ConfigLayer):
        return value
    if isinstance(value, Mapping):
        unknown = set(value) - {"modules", "special_args"}
        if unknown:
            raise ConfigError(f"{origin} returned unknown keys: {sorted(unknown)}")
        modules = value.get("modules") or ()
        special_args = value.get("special_args") or {}
        if not isinstance(modules, (list, tuple)):
            raise ConfigError(f"{origin} returned modules that are not a list")
        if not isinstance(special_args, Mapping):
            raise ConfigError(f"{origin} returned special_args that are not a mapping")
        if not all(isinstance(key, str) for key in special_args):
            raise ConfigError(f"{origin} returned special_args with non-string names")
        return ConfigLayer(modules=tuple(modules), special_args=dict(special_args))
    raise ConfigError(f"{origin} must return a layer or a mapping, got {type(value).__name__}")
