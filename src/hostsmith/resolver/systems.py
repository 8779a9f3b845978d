"""Platform resolution and system filtering."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from hostsmith.types import Arch, HostClass


class _HasPlatform(Protocol):
    @property
    def platform(self) -> str | None: ...


def resolve_platform(arch: Arch, host_class: HostClass | str) -> str | None:
    """Return the platform identifier for *arch* and *host_class*.

    ``nixos`` hosts map to ``{arch}-linux`` and ``darwin`` hosts to
    ``{arch}-darwin``. Home and android hosts have no platform.
    """
    if host_class == HostClass.NIXOS:
        return f"{arch}-linux"
    if host_class == HostClass.DARWIN:
        return f"{arch}-darwin"
    return None


def filter_by_system[T: _HasPlatform](hosts: Mapping[str, T], systems: Sequence[str] | None) -> dict[str, T]:
    """Keep hosts whose platform is in *systems*, or that have no platform at all."""
    if systems is None:
        return dict(hosts)
    allowed = set(systems)
    return {name: host for name, host in hosts.items() if host.platform is None or host.platform in allowed}
