"""CLI entrypoint for Hostsmith."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from hostsmith import __version__
from hostsmith.builders import plan_context
from hostsmith.config import load_config
from hostsmith.constants.branding import CLI_DESCRIPTION, VALID_CONFIG_MESSAGE
from hostsmith.constants.reporting import VALID_OUTPUT_FORMATS
from hostsmith.exceptions import ConfigError, HostsmithError
from hostsmith.reporting import plan_to_json, render_text
from hostsmith.resolver import resolve_hosts, resolve_records


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="hostsmith",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Resolve hosts and show what each would be built from")
    show.add_argument("-r", "--root", type=Path, required=True, help="Workspace root path")
    show.add_argument("-c", "--config", type=Path, help="Explicit config file")
    show.add_argument(
        "--format",
        choices=sorted(VALID_OUTPUT_FORMATS),
        default="text",
        help="Output format (default: text)",
    )
    show.add_argument("-v", "--verbose", action="store_true", help="Show special args and debug logging")

    validate = subparsers.add_parser("validate-config", help="Discover and merge hosts without building")
    validate.add_argument("-r", "--root", type=Path, required=True, help="Workspace root path")
    validate.add_argument("-c", "--config", type=Path, help="Explicit config file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    verbose = getattr(args, "verbose", False)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(message)s")

    if args.command == "validate-config":
        return _handle_validate_config(args)

    if args.command != "show":
        parser.error(f"Unsupported command: {args.command}")

    try:
        config = load_config(args.root, args.config)
        outputs = resolve_hosts(config, plan_context(config.root))
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except HostsmithError as exc:
        print(f"Resolution error: {exc}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(plan_to_json(outputs), indent=2, sort_keys=True))
    else:
        print(render_text(outputs, verbose=args.verbose))
    return 0


def _handle_validate_config(args: argparse.Namespace) -> int:
    """Load settings, discover and merge hosts, and report the outcome."""
    try:
        records = resolve_records(load_config(args.root, args.config))
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except HostsmithError as exc:
        print(f"Resolution error: {exc}", file=sys.stderr)
        return 1

    print(f"{VALID_CONFIG_MESSAGE} {len(records)} host(s) resolved.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
