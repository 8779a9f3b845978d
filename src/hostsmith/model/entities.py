"""Layer, host and builder entities shared across the resolver."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hostsmith.constants.hosts import DEFAULT_ARCH
from hostsmith.resolver.systems import resolve_platform
from hostsmith.types import Arch, HostClass, ModuleRef, ProviderSlot


@dataclass(frozen=True)
class ConfigLayer:
    """Modules and special args contributed by one configuration source."""

    modules: tuple[ModuleRef, ...] = ()
    special_args: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.modules and not self.special_args


EMPTY_LAYER = ConfigLayer()

type LayerFn = Callable[[Any], ConfigLayer | Mapping[str, Any]]


def empty_layer_fn(_key: Any) -> ConfigLayer:
    """Per-class / per-arch function that contributes nothing."""
    return EMPTY_LAYER


@dataclass(frozen=True)
class HostSpec:
    """A raw host definition, either discovered on disk or declared explicitly."""

    name: str
    host_class: HostClass = HostClass.NIXOS
    arch: Arch = DEFAULT_ARCH
    pure: bool = False
    deployable: bool = False
    modules: tuple[ModuleRef, ...] = ()
    special_args: Mapping[str, Any] = field(default_factory=dict)
    builder_overrides: Mapping[ProviderSlot, Any] = field(default_factory=dict)
    path: Path | None = None

    @property
    def platform(self) -> str | None:
        """Derived from ``arch`` and ``host_class``; never set directly."""
        return resolve_platform(self.arch, self.host_class)

    @property
    def layer(self) -> ConfigLayer:
        """The host's own explicit layer."""
        return ConfigLayer(modules=self.modules, special_args=self.special_args)


@dataclass(frozen=True)
class HostRecord:
    """A host after layer merging."""

    spec: HostSpec
    modules: tuple[ModuleRef, ...]
    special_args: Mapping[str, Any]

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def host_class(self) -> HostClass:
        return self.spec.host_class

    @property
    def arch(self) -> Arch:
        return self.spec.arch

    @property
    def platform(self) -> str | None:
        return self.spec.platform

    @property
    def pure(self) -> bool:
        return self.spec.pure

    @property
    def deployable(self) -> bool:
        return self.spec.deployable


@dataclass(frozen=True)
class Default:
    """A module option value set at default priority, so user modules may override it."""

    value: Any


@dataclass(frozen=True)
class InjectedModule:
    """A standard module added ahead of user modules.

    ``key`` is namespaced so a builder's module system can detect the same
    module being injected twice.
    """

    key: str
    file: str
    config: Mapping[str, Any]


@dataclass(frozen=True)
class ScopedHandles:
    """Platform-scoped views of the composition's ``self`` and ``inputs``."""

    self_scoped: Any
    inputs_scoped: Any


@dataclass(frozen=True)
class BuilderProvider:
    """A named source of a system builder.

    ``build`` is called as ``build(special_args=..., modules=...)`` and its
    return value is opaque to the resolver. ``source`` is what standard
    modules wire in as the package-set source.
    """

    name: str
    build: Callable[..., Any]
    source: Any = None


@dataclass(frozen=True)
class CompositionContext:
    """The invoking composition and its platform scoping callback."""

    inputs: Mapping[str, Any] = field(default_factory=dict)
    self_ref: Any = None
    with_system: Callable[[str], ScopedHandles] | None = None

    def scoped(self, platform: str) -> ScopedHandles:
        """Return handles scoped to *platform*; unscoped when no callback is set."""
        if self.with_system is None:
            return ScopedHandles(self_scoped=self.self_ref, inputs_scoped=self.inputs)
        return self.with_system(platform)


@dataclass(frozen=True)
class BuildPlan:
    """What a plan provider returns: the exact inputs a builder would receive."""

    provider: str
    special_args: Mapping[str, Any]
    modules: tuple[ModuleRef, ...]
