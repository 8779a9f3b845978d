"""Settings and host record loading for host resolution."""

from __future__ import annotations

import difflib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from hostsmith.config.model import AutoConfig, HostsmithConfig, layer_lookup
from hostsmith.constants.config import (
    ALLOWED_AUTO_KEYS,
    ALLOWED_CONFIG_KEYS,
    ALLOWED_HOST_KEYS,
    ALLOWED_LAYER_KEYS,
    CONFIG_FILENAME,
    RELATIVE_MODULE_PREFIXES,
)
from hostsmith.constants.hosts import DEFAULT_ARCH, DEFAULT_HOST_NAME, VALID_ARCHES
from hostsmith.exceptions import ConfigError
from hostsmith.io import load_yaml_mapping
from hostsmith.model import ConfigLayer, HostSpec
from hostsmith.types import HostClass, ModuleRef, ProviderSlot


def load_config(root: Path, config_path: Path | None = None) -> HostsmithConfig:
    """Load settings from ``hostsmith.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return HostsmithConfig(root=root)

    raw = load_yaml_mapping(path)
    _check_keys(raw, ALLOWED_CONFIG_KEYS, "config")
    base_dir = path.parent

    auto = _build_auto(_ensure_mapping(raw.get("auto"), "auto"))

    hosts: dict[str, HostSpec] = {}
    shared: ConfigLayer | None = None
    for name, host_raw in _ensure_mapping(raw.get("hosts"), "hosts").items():
        if not isinstance(name, str) or not name.strip():
            raise ConfigError(f"hosts: host names must be non-empty strings, got {name!r}")
        key_name = f"hosts.{name}"
        if name == DEFAULT_HOST_NAME:
            shared = build_layer(_ensure_mapping(host_raw, key_name), key_name, base_dir)
            continue
        hosts[name] = build_host_spec(name, _ensure_mapping(host_raw, key_name), key_name, base_dir)

    per_class = {
        _parse_class(key, f"per_class.{key}"): build_layer(
            _ensure_mapping(value, f"per_class.{key}"), f"per_class.{key}", base_dir
        )
        for key, value in _ensure_mapping(raw.get("per_class"), "per_class").items()
    }
    per_arch = {
        _parse_arch(key, f"per_arch.{key}"): build_layer(
            _ensure_mapping(value, f"per_arch.{key}"), f"per_arch.{key}", base_dir
        )
        for key, value in _ensure_mapping(raw.get("per_arch"), "per_arch").items()
    }

    return HostsmithConfig(
        root=root,
        auto=auto,
        hosts=hosts,
        shared=shared,
        per_class=layer_lookup(per_class),
        per_arch=layer_lookup(per_arch),
    )


def build_layer(raw: Mapping[str, Any], origin: str, base_dir: Path) -> ConfigLayer:
    """Build a :class:`ConfigLayer` from a raw ``modules`` / ``special_args`` mapping."""
    _check_keys(raw, ALLOWED_LAYER_KEYS, origin)
    return ConfigLayer(
        modules=_build_modules(raw.get("modules"), f"{origin}.modules", base_dir),
        special_args=_ensure_args(raw.get("special_args"), f"{origin}.special_args"),
    )


def build_host_spec(
    name: str,
    raw: Mapping[str, Any],
    origin: str,
    base_dir: Path,
    *,
    path: Path | None = None,
) -> HostSpec:
    """Build a :class:`HostSpec` from a raw host record.

    *origin* names the record in error messages; *base_dir* anchors relative
    module paths.
    """
    _check_keys(raw, ALLOWED_HOST_KEYS, origin)

    return HostSpec(
        name=name,
        host_class=_parse_class(raw.get("class", HostClass.NIXOS.value), f"{origin}.class"),
        arch=_parse_arch(raw.get("arch", DEFAULT_ARCH), f"{origin}.arch"),
        pure=_ensure_bool(raw.get("pure", False), f"{origin}.pure"),
        deployable=_ensure_bool(raw.get("deployable", False), f"{origin}.deployable"),
        modules=_build_modules(raw.get("modules"), f"{origin}.modules", base_dir),
        special_args=_ensure_args(raw.get("special_args"), f"{origin}.special_args"),
        builder_overrides=_build_overrides(raw.get("builders"), f"{origin}.builders"),
        path=path,
    )


def _build_auto(raw: dict[str, Any]) -> AutoConfig:
    _check_keys(raw, ALLOWED_AUTO_KEYS, "auto")
    systems_raw = raw.get("systems")
    systems = None if systems_raw is None else tuple(_ensure_string_list(systems_raw, "auto.systems"))
    return AutoConfig(
        enable=_ensure_bool(raw.get("enable", False), "auto.enable"),
        hosts_dir=_ensure_optional_path(raw.get("hosts_dir"), "auto.hosts_dir"),
        modules_dir=_ensure_optional_path(raw.get("modules_dir"), "auto.modules_dir"),
        systems=systems,
    )


def _build_modules(value: Any, key_name: str, base_dir: Path) -> tuple[ModuleRef, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigError(f"{key_name} must be a list")
    return tuple(_resolve_module_ref(item, key_name, base_dir) for item in value)


def _resolve_module_ref(item: Any, key_name: str, base_dir: Path) -> ModuleRef:
    """Anchor ``./`` and ``../`` references at *base_dir*; keep everything else as-is."""
    if not isinstance(item, str) or not item.startswith(RELATIVE_MODULE_PREFIXES):
        return item
    resolved = (base_dir / item).resolve()
    if not resolved.exists():
        raise ConfigError(f"{key_name}: module path not found: {item} (resolved to {resolved})")
    return resolved


def _build_overrides(value: Any, key_name: str) -> dict[ProviderSlot, str]:
    overrides: dict[ProviderSlot, str] = {}
    for slot_name, input_name in _ensure_mapping(value, key_name).items():
        try:
            slot = ProviderSlot(slot_name)
        except ValueError:
            valid = sorted(slot.value for slot in ProviderSlot)
            raise ConfigError(f"{key_name}: unknown provider slot {slot_name!r}; expected one of {valid}") from None
        if not isinstance(input_name, str) or not input_name.strip():
            raise ConfigError(f"{key_name}.{slot_name} must be an input name")
        overrides[slot] = input_name
    return overrides


def _parse_class(value: Any, key_name: str) -> HostClass:
    if not isinstance(value, str):
        raise ConfigError(f"{key_name} must be a string")
    try:
        return HostClass.parse(value)
    except ValueError as exc:
        raise ConfigError(f"{key_name}: {exc}") from exc


def _parse_arch(value: Any, key_name: str) -> str:
    if not isinstance(value, str) or value not in VALID_ARCHES:
        raise ConfigError(f"{key_name} must be one of {list(VALID_ARCHES)}, got {value!r}")
    return value


def _ensure_mapping(value: Any, key_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key_name} must be a mapping")
    return value


def _ensure_args(value: Any, key_name: str) -> dict[str, Any]:
    args = _ensure_mapping(value, key_name)
    bad = sorted(repr(key) for key in args if not isinstance(key, str))
    if bad:
        raise ConfigError(f"{key_name}: argument names must be strings, got {', '.join(bad)}")
    return args


def _ensure_bool(value: Any, key_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{key_name} must be a boolean")
    return value


def _ensure_optional_path(value: Any, key_name: str) -> Path | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{key_name} must be a path string")
    return Path(value)


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _check_keys(raw: Mapping[str, Any], allowed: frozenset[str], origin: str) -> None:
    for key in sorted(raw, key=str):
        if key not in allowed:
            hint = _suggest_key(str(key), allowed)
            message = f"{origin}: unknown key `{key}`"
            raise ConfigError(f"{message} ({hint})" if hint else message)


def _suggest_key(key: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean' hint for a mistyped key."""
    matches = difflib.get_close_matches(key, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""
