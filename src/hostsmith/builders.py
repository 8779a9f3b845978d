"""Plan-recording builder providers.

A plan provider does not build anything: its builder returns a
:class:`~hostsmith.model.BuildPlan` holding the exact special args and
modules it was called with. The CLI uses them to show what each host
would be built from.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from hostsmith.constants.hosts import PROVIDER_INPUT_NAMES
from hostsmith.model import BuilderProvider, BuildPlan, CompositionContext


def plan_provider(name: str, source: Any = None) -> BuilderProvider:
    """Return a provider named *name* whose builder records its inputs."""

    def build(*, special_args: Any, modules: Sequence[Any]) -> BuildPlan:
        return BuildPlan(provider=name, special_args=special_args, modules=tuple(modules))

    return BuilderProvider(name=name, build=build, source=name if source is None else source)


def plan_context(root: Path) -> CompositionContext:
    """Return a context with a plan provider under each slot's first conventional input name."""
    inputs = {names[0]: plan_provider(names[0]) for names in PROVIDER_INPUT_NAMES.values()}
    return CompositionContext(inputs=inputs, self_ref=root)
