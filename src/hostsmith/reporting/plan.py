"""Text and JSON renderings of resolved build plans."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from hostsmith.constants.reporting import INLINE_MODULE_LABEL, PLAN_SCHEMA_VERSION
from hostsmith.model import BuildPlan, InjectedModule
from hostsmith.types import JsonObject


def describe_module(module: Any) -> str:
    """Return a short, stable label for a module reference."""
    if isinstance(module, InjectedModule):
        return module.key
    if isinstance(module, Path):
        return module.as_posix()
    if isinstance(module, str):
        return module
    if isinstance(module, Mapping):
        return INLINE_MODULE_LABEL
    if callable(module):
        return f"<function {getattr(module, '__qualname__', type(module).__name__)}>"
    return repr(module)


def plan_to_json(outputs: Mapping[str, Mapping[str, Any]]) -> JsonObject:
    """Convert resolved plan collections into a JSON-serializable document."""
    collections: JsonObject = {}
    for collection_name, hosts in outputs.items():
        collections[collection_name] = {
            name: _plan_entry(_require_plan(name, plan)) for name, plan in sorted(hosts.items())
        }
    return {"schema_version": PLAN_SCHEMA_VERSION, "collections": collections}


def render_text(outputs: Mapping[str, Mapping[str, Any]], *, verbose: bool = False) -> str:
    """Render resolved plan collections as human-readable text."""
    lines: list[str] = []
    for collection_name, hosts in outputs.items():
        if not hosts:
            continue
        lines.append(f"{collection_name} ({len(hosts)})")
        for name, artifact in sorted(hosts.items()):
            plan = _require_plan(name, artifact)
            lines.append(f"  {name}  [{plan.provider}]")
            lines.extend(f"    - {describe_module(module)}" for module in plan.modules)
            if verbose:
                keys = ", ".join(sorted(plan.special_args)) or "-"
                lines.append(f"    special args: {keys}")
    if not lines:
        return "No hosts resolved."
    return "\n".join(lines)


def _plan_entry(plan: BuildPlan) -> JsonObject:
    return {
        "provider": plan.provider,
        "modules": [describe_module(module) for module in plan.modules],
        "special_args": sorted(plan.special_args),
    }


def _require_plan(name: str, artifact: Any) -> BuildPlan:
    if not isinstance(artifact, BuildPlan):
        raise TypeError(f"Host {name!r} was not built by a plan provider: {type(artifact).__name__}")
    return artifact
