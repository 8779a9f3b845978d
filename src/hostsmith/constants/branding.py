"""CLI branding strings."""

from __future__ import annotations

CLI_DESCRIPTION: str = (
    "Resolve layered host definitions into build inputs for system builders.\n"
    "\n"
    "Hosts are discovered from the hosts directory (or declared in hostsmith.yaml),\n"
    "merged with shared, per-class and per-arch layers, and grouped by class."
)
VALID_CONFIG_MESSAGE: str = "Configuration is valid."
