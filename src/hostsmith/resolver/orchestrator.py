"""End-to-end host resolution: discovery, merging and assembly."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from hostsmith.config import HostsmithConfig, InferredPaths, infer_paths, load_config
from hostsmith.constants.hosts import DEFAULT_HOST_NAME
from hostsmith.exceptions import DuplicateHostError
from hostsmith.model import EMPTY_LAYER, CompositionContext, ConfigLayer, HostRecord, HostSpec
from hostsmith.resolver.assembler import assemble
from hostsmith.resolver.discovery import discover_class_module_set, discover_hosts, load_shared_layer
from hostsmith.resolver.merge import merge_host, merge_layers

logger = logging.getLogger(__name__)


def resolve_records(config: HostsmithConfig, paths: InferredPaths | None = None) -> dict[str, HostRecord]:
    """Discover and merge every host of *config* without building anything."""
    if paths is None:
        paths = infer_paths(config.auto, config.root)

    hosts: dict[str, HostSpec] = {}
    shared: ConfigLayer = EMPTY_LAYER
    if paths.hosts_dir is not None:
        hosts = discover_hosts(paths.hosts_dir)
        shared = load_shared_layer(paths.hosts_dir)

    explicit = dict(config.hosts)
    explicit_default = explicit.pop(DEFAULT_HOST_NAME, None)
    if explicit_default is not None:
        shared = merge_layers(shared, explicit_default.layer)
    if config.shared is not None:
        shared = merge_layers(shared, config.shared)

    for name, spec in explicit.items():
        if name in hosts:
            raise DuplicateHostError(
                f"Host {name!r} is declared explicitly and also discovered at {hosts[name].path}; keep only one"
            )
        hosts[name] = spec

    class_modules = discover_class_module_set(paths.modules_dir)
    return {
        name: merge_host(spec, shared, config.per_class, config.per_arch, class_modules[spec.host_class])
        for name, spec in sorted(hosts.items())
    }


def resolve_hosts(config: HostsmithConfig, context: CompositionContext) -> dict[str, dict[str, Any]]:
    """Resolve *config* into per-class collections of built artifacts."""
    paths = infer_paths(config.auto, config.root)
    records = resolve_records(config, paths)
    outputs = assemble(records, context, paths.systems)
    logger.info(
        "Resolved %d host(s): %s",
        sum(len(collection) for collection in outputs.values()),
        ", ".join(f"{name}={len(collection)}" for name, collection in outputs.items()),
    )
    return outputs


def resolve_workspace(
    root: Path,
    context: CompositionContext,
    config_path: Path | None = None,
) -> dict[str, dict[str, Any]]:
    """Load ``hostsmith.yaml`` under *root* and resolve it."""
    return resolve_hosts(load_config(root, config_path), context)
