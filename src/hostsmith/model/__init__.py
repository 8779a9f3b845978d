"""Core data models for Hostsmith."""

from .entities import (
    EMPTY_LAYER,
    BuilderProvider,
    BuildPlan,
    CompositionContext,
    ConfigLayer,
    Default,
    HostRecord,
    HostSpec,
    InjectedModule,
    LayerFn,
    ScopedHandles,
    empty_layer_fn,
)

__all__ = [
    "EMPTY_LAYER",
    "BuildPlan",
    "BuilderProvider",
    "CompositionContext",
    "ConfigLayer",
    "Default",
    "HostRecord",
    "HostSpec",
    "InjectedModule",
    "LayerFn",
    "ScopedHandles",
    "empty_layer_fn",
]
