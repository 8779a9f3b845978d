"""Cross-module type aliases."""

from __future__ import annotations

from typing import Any

type Arch = str
# Opaque to the engine; only the builder interprets it.
type ModuleRef = Any

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
type JsonObject = dict[str, JsonValue]
