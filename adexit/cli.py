"""CLI entry point for adexit."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Sequence

from adexit.config.errors import ConfigError
from adexit.config.loader import load_config
from adexit.config.settings import VALID_LOG_FORMATS, VALID_LOG_LEVELS, parse_logging_config
from adexit.config.vendors import resolve_vendor_catalog
from adexit.core.logging import configure_logging, get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="adexit")
    parser.add_argument("--log-level", type=str.upper, choices=sorted(VALID_LOG_LEVELS), default=None)
    parser.add_argument("--log-format", choices=sorted(VALID_LOG_FORMATS), default="ecs_json")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Validate an exit config document")
    validate_parser.add_argument("config", type=Path)
    validate_parser.add_argument("--vendors", type=Path, default=None, help="Analytics vendor catalog (YAML or JSON)")
    validate_parser.add_argument(
        "--print",
        dest="print_config",
        action="store_true",
        help="Print the normalized config instead of a summary",
    )

    vendors_parser = subparsers.add_parser("vendors", help="List analytics vendors in the catalog")
    vendors_parser.add_argument("--vendors", type=Path, default=None, help="Analytics vendor catalog (YAML or JSON)")

    return parser


def _report_failure(*, action: str, path: Path | None, kind: str, message: str) -> int:
    get_logger("adexit.cli").warning(
        message,
        extra={
            "event_action": action,
            "event_outcome": "failure",
            "config_path": str(path) if path is not None else None,
            "error_kind": kind,
        },
    )
    print(json.dumps({"error": message, "kind": kind}, indent=2))
    return 1


def cmd_validate(config_path: Path, *, vendors_path: Path | None = None, print_config: bool = False) -> int:
    try:
        vendors = resolve_vendor_catalog(vendors_path)
        config = load_config(config_path, vendors=vendors)
    except ConfigError as exc:
        return _report_failure(action="config_rejected", path=config_path, kind=exc.kind, message=str(exc))
    except FileNotFoundError as exc:
        return _report_failure(action="config_rejected", path=config_path, kind="FileNotFound", message=str(exc))

    if print_config:
        print(json.dumps(config.to_dict(), indent=2))
        return 0
    summary = {
        "ok": True,
        "config": str(config_path),
        "targets": sorted(config.targets),
        "filters": sorted(config.filters),
        "transport": config.transport,
    }
    print(json.dumps(summary, indent=2))
    return 0


def cmd_vendors(vendors_path: Path | None = None) -> int:
    try:
        vendors = resolve_vendor_catalog(vendors_path)
    except ConfigError as exc:
        return _report_failure(action="vendors_rejected", path=vendors_path, kind=exc.kind, message=str(exc))
    except FileNotFoundError as exc:
        return _report_failure(action="vendors_rejected", path=vendors_path, kind="FileNotFound", message=str(exc))
    print(json.dumps({"vendors": vendors.summary()}, indent=2))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(
        parse_logging_config({"level": args.log_level, "fmt": args.log_format}),
        force=True,
    )

    if args.command == "validate":
        return cmd_validate(args.config, vendors_path=args.vendors, print_config=args.print_config)
    if args.command == "vendors":
        return cmd_vendors(args.vendors)

    parser.error(f"unknown command: {args.command}")
    return 2
