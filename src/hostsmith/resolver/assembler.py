"""Builder selection, standard module injection and per-class collection assembly."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, assert_never

from hostsmith.constants.hosts import (
    DEFAULT_HOST_NAME,
    KEY_HOSTNAME,
    KEY_NIXPKGS,
    KEY_NIXPKGS_DARWIN,
    KEY_SPECIAL_ARGS,
    PROVIDER_INPUT_NAMES,
    SCOPED_INPUTS_ARG,
    SCOPED_SELF_ARG,
)
from hostsmith.exceptions import ConfigError, MissingBuilderError
from hostsmith.model import BuilderProvider, CompositionContext, Default, HostRecord, HostSpec, InjectedModule
from hostsmith.resolver.systems import filter_by_system
from hostsmith.types import HostClass, ProviderSlot
from hostsmith.utils import deep_merge

logger = logging.getLogger(__name__)

STANDARD_MODULE_FILE: str = str(Path(__file__).resolve())


def _slot_for(host_class: HostClass) -> ProviderSlot:
    match host_class:
        case HostClass.NIXOS:
            return ProviderSlot.NIXPKGS
        case HostClass.DARWIN:
            return ProviderSlot.DARWIN
        case HostClass.HOME:
            return ProviderSlot.HOME_MANAGER
        case HostClass.ANDROID_HOST:
            return ProviderSlot.ANDROID
        case _:
            assert_never(host_class)


CLASS_PROVIDER_SLOTS: dict[HostClass, ProviderSlot] = {host_class: _slot_for(host_class) for host_class in HostClass}

type Providers = Mapping[ProviderSlot, BuilderProvider | None]


def resolve_providers(host: HostSpec, inputs: Mapping[str, Any]) -> dict[ProviderSlot, BuilderProvider | None]:
    """Resolve every provider slot for *host*.

    A host override wins; it may be a :class:`BuilderProvider` or the name of
    an input. Otherwise the slot's conventional input names are probed.
    """
    providers: dict[ProviderSlot, BuilderProvider | None] = {}
    for slot in ProviderSlot:
        override = host.builder_overrides.get(slot)
        if isinstance(override, str):
            if override not in inputs:
                raise ConfigError(f"Host {host.name!r}: builders.{slot} names unknown input {override!r}")
            providers[slot] = _as_provider(inputs[override], override)
        elif override is not None:
            providers[slot] = _as_provider(override, f"builders.{slot}")
        else:
            providers[slot] = next(
                (
                    inputs[name]
                    for name in PROVIDER_INPUT_NAMES[slot.value]
                    if isinstance(inputs.get(name), BuilderProvider)
                ),
                None,
            )
    return providers


def _as_provider(value: Any, origin: str) -> BuilderProvider:
    if not isinstance(value, BuilderProvider):
        raise ConfigError(f"{origin} is not a builder provider (got {type(value).__name__})")
    return value


def resolve_builder(host_class: HostClass, providers: Providers) -> BuilderProvider:
    """Select the builder provider for *host_class*, failing when it is missing."""
    slot = CLASS_PROVIDER_SLOTS[host_class]
    provider = providers.get(slot)
    if provider is None:
        names = " or ".join(PROVIDER_INPUT_NAMES[slot.value])
        raise MissingBuilderError(f"{names} input required for {host_class} hosts")
    return provider


def standard_modules(
    *,
    name: str,
    host_class: HostClass,
    platform: str | None,
    nixpkgs_source: Any,
    context: CompositionContext,
) -> tuple[InjectedModule, ...]:
    """Return the modules injected ahead of every host's own modules."""
    modules: list[InjectedModule] = []

    if platform is not None:
        scoped = context.scoped(platform)
        modules.append(
            InjectedModule(
                key=KEY_SPECIAL_ARGS,
                file=STANDARD_MODULE_FILE,
                config={
                    "_module": {
                        "args": {
                            SCOPED_SELF_ARG: scoped.self_scoped,
                            SCOPED_INPUTS_ARG: scoped.inputs_scoped,
                        }
                    }
                },
            )
        )

    modules.append(
        InjectedModule(
            key=KEY_HOSTNAME,
            file=STANDARD_MODULE_FILE,
            config={"networking": {"hostName": Default(name)}},
        )
    )

    if platform is not None:
        modules.append(
            InjectedModule(
                key=KEY_NIXPKGS,
                file=STANDARD_MODULE_FILE,
                config={"nixpkgs": {"hostPlatform": Default(platform), "flake": {"source": nixpkgs_source}}},
            )
        )

    if host_class is HostClass.DARWIN:
        modules.append(
            InjectedModule(
                key=KEY_NIXPKGS_DARWIN,
                file=STANDARD_MODULE_FILE,
                config={"nixpkgs": {"source": Default(nixpkgs_source)}},
            )
        )

    return tuple(modules)


def build_host(record: HostRecord, context: CompositionContext) -> Any:
    """Invoke the builder for *record* and return whatever it builds."""
    providers = resolve_providers(record.spec, context.inputs)
    provider = resolve_builder(record.host_class, providers)

    nixpkgs = providers[ProviderSlot.NIXPKGS]
    if record.platform is not None and nixpkgs is None:
        raise MissingBuilderError(f"nixpkgs input required for {record.host_class} hosts")

    modules = (
        *standard_modules(
            name=record.name,
            host_class=record.host_class,
            platform=record.platform,
            nixpkgs_source=nixpkgs.source if nixpkgs is not None else None,
            context=context,
        ),
        *record.modules,
    )
    special_args = deep_merge({"inputs": context.inputs, "self": context.self_ref}, record.special_args)

    logger.debug("Building %s with %s (%d modules)", record.name, provider.name, len(modules))
    return provider.build(special_args=special_args, modules=modules)


def assemble(
    records: Mapping[str, HostRecord],
    context: CompositionContext,
    systems: Sequence[str] | None = None,
) -> dict[str, dict[str, Any]]:
    """Build every retained host and group the results by class collection."""
    hosts = {name: record for name, record in records.items() if name != DEFAULT_HOST_NAME}
    retained = filter_by_system(hosts, systems)
    skipped = sorted(set(hosts) - set(retained))
    if skipped:
        logger.info("Skipping hosts outside systems filter: %s", ", ".join(skipped))

    outputs: dict[str, dict[str, Any]] = {host_class.collection: {} for host_class in HostClass}
    for name in sorted(retained):
        record = retained[name]
        outputs[record.host_class.collection][name] = build_host(record, context)
    return outputs
