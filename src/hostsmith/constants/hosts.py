"""Host defaults, provider input names and injected module keys."""

from __future__ import annotations

DEFAULT_HOST_NAME: str = "default"
DEFAULT_ARCH: str = "x86_64"
VALID_ARCHES: tuple[str, ...] = (
    "x86_64",
    "aarch64",
    "armv6l",
    "armv7l",
    "i686",
    "powerpc64le",
    "riscv64",
)

COLLECTION_SUFFIX: str = "Configurations"

# Conventional input names probed, in order, for each provider slot.
PROVIDER_INPUT_NAMES: dict[str, tuple[str, ...]] = {
    "nixpkgs": ("nixpkgs",),
    "darwin": ("nix-darwin", "darwin"),
    "home_manager": ("home-manager",),
    "android": ("android", "nix-on-droid"),
}

KEY_SPECIAL_ARGS: str = "hostsmith#specialArgs"
KEY_HOSTNAME: str = "hostsmith#hostname"
KEY_NIXPKGS: str = "hostsmith#nixpkgs"
KEY_NIXPKGS_DARWIN: str = "hostsmith#nixpkgs-darwin"

SCOPED_SELF_ARG: str = "self'"
SCOPED_INPUTS_ARG: str = "inputs'"
