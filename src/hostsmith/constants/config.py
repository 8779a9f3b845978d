"""Settings file names and allowed keys."""

from __future__ import annotations

CONFIG_FILENAME: str = "hostsmith.yaml"

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset({"auto", "hosts", "per_class", "per_arch"})
ALLOWED_AUTO_KEYS: frozenset[str] = frozenset({"enable", "hosts_dir", "modules_dir", "systems"})
ALLOWED_LAYER_KEYS: frozenset[str] = frozenset({"modules", "special_args"})
ALLOWED_HOST_KEYS: frozenset[str] = frozenset(
    {"class", "arch", "pure", "deployable", "modules", "special_args", "builders"}
)

RELATIVE_MODULE_PREFIXES: tuple[str, ...] = ("./", "../")
