"""Shared type aliases for Hostsmith."""

from .common import Arch, JsonObject, JsonScalar, JsonValue, ModuleRef
from .host import HostClass, ProviderSlot

__all__ = [
    "Arch",
    "HostClass",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "ModuleRef",
    "ProviderSlot",
]
