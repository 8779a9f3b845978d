"""Plan rendering constants."""

from __future__ import annotations

PLAN_SCHEMA_VERSION: int = 1
VALID_OUTPUT_FORMATS: frozenset[str] = frozenset({"text", "json"})
INLINE_MODULE_LABEL: str = "<inline module>"
