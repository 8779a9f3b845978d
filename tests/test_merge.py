"""Tests for layer precedence, pure isolation and special-args overlay."""

from __future__ import annotations

from typing import Any

import pytest

from hostsmith.config import layer_lookup
from hostsmith.exceptions import ConfigError
from hostsmith.model import EMPTY_LAYER, ConfigLayer, HostSpec, empty_layer_fn
from hostsmith.resolver.merge import coerce_layer, merge_host, merge_layers
from hostsmith.types import HostClass
from hostsmith.utils import deep_merge


def test_host_wins_and_later_layers_override_earlier_ones() -> None:
    host = HostSpec(name="web", special_args={"c": 2})
    record = merge_host(
        host,
        ConfigLayer(special_args={"a": 1}),
        lambda _cls: ConfigLayer(special_args={"a": 2, "b": 1}),
        lambda _arch: ConfigLayer(special_args={"b": 2, "c": 1}),
        EMPTY_LAYER,
    )

    assert record.special_args == {"a": 2, "b": 2, "c": 2}


def test_auto_class_layer_sits_between_arch_and_host() -> None:
    host = HostSpec(name="web", special_args={"host": "host"})
    record = merge_host(
        host,
        ConfigLayer(special_args={"arch": "shared", "auto": "shared", "host": "shared"}),
        empty_layer_fn,
        lambda _arch: ConfigLayer(special_args={"arch": "arch", "auto": "arch"}),
        ConfigLayer(special_args={"auto": "auto", "host": "auto"}),
    )

    assert record.special_args == {"arch": "arch", "auto": "auto", "host": "host"}


def test_modules_concatenate_in_precedence_order_without_dedup() -> None:
    host = HostSpec(name="web", modules=("host", "dup"))
    record = merge_host(
        host,
        ConfigLayer(modules=("shared", "dup")),
        lambda _cls: ConfigLayer(modules=("class",)),
        lambda _arch: ConfigLayer(modules=("arch",)),
        ConfigLayer(modules=("auto",)),
    )

    assert record.modules == ("shared", "dup", "class", "arch", "auto", "host", "dup")


def test_pure_host_keeps_only_its_own_layer() -> None:
    calls: list[Any] = []

    def per_class(host_class: Any) -> ConfigLayer:
        calls.append(host_class)
        return ConfigLayer(modules=("class",), special_args={"from_class": True})

    host = HostSpec(name="kiosk", pure=True, modules=("b", "a"), special_args={"pure_only": 1})
    record = merge_host(
        host,
        ConfigLayer(modules=("shared",), special_args={"shared": True}),
        per_class,
        lambda _arch: ConfigLayer(special_args={"from_arch": True}),
        ConfigLayer(modules=("auto",)),
    )

    assert record.modules == ("b", "a")
    assert record.special_args == {"pure_only": 1}
    assert calls == []


def test_layer_functions_receive_the_host_scalars() -> None:
    seen: dict[str, Any] = {}

    def per_class(host_class: Any) -> ConfigLayer:
        seen["class"] = host_class
        return EMPTY_LAYER

    def per_arch(arch: Any) -> ConfigLayer:
        seen["arch"] = arch
        return EMPTY_LAYER

    host = HostSpec(name="mac", host_class=HostClass.DARWIN, arch="aarch64")
    merge_host(host, EMPTY_LAYER, per_class, per_arch, EMPTY_LAYER)

    assert seen == {"class": HostClass.DARWIN, "arch": "aarch64"}
    assert seen["class"] == "darwin"


def test_nested_special_args_overlay_recursively() -> None:
    merged = merge_layers(
        ConfigLayer(special_args={"net": {"dns": "1.1.1.1", "mtu": 1500}, "tags": ["a"]}),
        ConfigLayer(special_args={"net": {"mtu": 9000}, "tags": ["b"]}),
    )

    assert merged.special_args == {"net": {"dns": "1.1.1.1", "mtu": 9000}, "tags": ["b"]}


def test_non_mapping_replaces_mapping_wholesale() -> None:
    assert deep_merge({"net": {"dns": "x"}}, {"net": None}) == {"net": None}


def test_merged_nested_mappings_are_not_shared_with_sources() -> None:
    base = {"net": {"dns": "1.1.1.1"}, "only_base": {"x": 1}}
    overlay = {"extra": {"y": 2}}

    merged = deep_merge(base, overlay)
    merged["net"]["dns"] = "changed"
    merged["only_base"]["x"] = 99
    merged["extra"]["y"] = 99

    assert base == {"net": {"dns": "1.1.1.1"}, "only_base": {"x": 1}}
    assert overlay == {"extra": {"y": 2}}


def test_merging_never_mutates_source_layers() -> None:
    shared_args = {"net": {"dns": "1.1.1.1"}}
    shared = ConfigLayer(modules=("shared",), special_args=shared_args)
    host = HostSpec(name="web", special_args={"net": {"dns": "9.9.9.9"}})

    merge_host(host, shared, empty_layer_fn, empty_layer_fn, EMPTY_LAYER)

    assert shared_args == {"net": {"dns": "1.1.1.1"}}
    assert shared.modules == ("shared",)
    assert host.special_args == {"net": {"dns": "9.9.9.9"}}


def test_merge_is_deterministic() -> None:
    host = HostSpec(name="web", modules=("h",), special_args={"x": 1})
    shared = ConfigLayer(modules=("s",), special_args={"y": 2})
    per_class = layer_lookup({HostClass.NIXOS: ConfigLayer(modules=("c",))})

    first = merge_host(host, shared, per_class, empty_layer_fn, EMPTY_LAYER)
    second = merge_host(host, shared, per_class, empty_layer_fn, EMPTY_LAYER)

    assert first == second


def test_layer_functions_may_return_plain_mappings() -> None:
    record = merge_host(
        HostSpec(name="web"),
        EMPTY_LAYER,
        lambda _cls: {"modules": ["class"], "special_args": {"k": "v"}},
        lambda _arch: {},
        EMPTY_LAYER,
    )

    assert record.modules == ("class",)
    assert record.special_args == {"k": "v"}


@pytest.mark.parametrize(
    ("value", "expected_match"),
    [
        (None, "must return a layer"),
        ({"imports": []}, "unknown keys"),
        ({"modules": "x"}, "not a list"),
        ({"special_args": ["x"]}, "not a mapping"),
        ({"special_args": {1: "one"}}, "non-string names"),
    ],
    ids=["none", "unknown-key", "modules-not-list", "args-not-mapping", "args-non-string-names"],
)
def test_coerce_layer_rejects_invalid_values(value: Any, expected_match: str) -> None:
    with pytest.raises(ConfigError, match=expected_match):
        coerce_layer(value, "per_class(nixos)")


def test_layer_lookup_matches_class_names_and_members() -> None:
    lookup = layer_lookup({"darwin": ConfigLayer(modules=("mac",))})

    assert lookup(HostClass.DARWIN).modules == ("mac",)
    assert lookup("darwin").modules == ("mac",)
    assert lookup(HostClass.NIXOS) is EMPTY_LAYER
