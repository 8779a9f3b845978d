"""Closed enumerations for host classes and builder provider slots."""

from __future__ import annotations

from enum import Enum

from hostsmith.constants.hosts import COLLECTION_SUFFIX


class HostClass(str, Enum):
    """Kind of system target a host represents."""

    NIXOS = "nixos"
    DARWIN = "darwin"
    HOME = "home"
    ANDROID_HOST = "androidHost"

    @property
    def collection(self) -> str:
        """Name of the output collection holding hosts of this class."""
        return f"{self.value}{COLLECTION_SUFFIX}"

    @classmethod
    def parse(cls, value: str) -> HostClass:
        """Return the member for *value*, raising ``ValueError`` when unknown."""
        try:
            return cls(value)
        except ValueError:
            valid = [member.value for member in cls]
            raise ValueError(f"unknown host class {value!r}; expected one of {valid}") from None

    def __str__(self) -> str:
        return self.value


class ProviderSlot(str, Enum):
    """Builder provider a host class draws its builder from."""

    NIXPKGS = "nixpkgs"
    DARWIN = "darwin"
    HOME_MANAGER = "home_manager"
    ANDROID = "android"

    def __str__(self) -> str:
        return self.value
