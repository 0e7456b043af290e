"""Command-line front end for beacon-conformance."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from beacon_conformance.catalogues import (
    DEFAULT_CATALOGUE,
    list_catalogues,
    load_catalogue,
)
from beacon_conformance.dispatcher import (
    DecodeFailure,
    MissingType,
    Outcome,
    UnknownType,
    Validated,
)
from beacon_conformance.export import catalogue_to_json_schemas, schema_to_json
from beacon_conformance.observer import BeaconObserver, ObserverSettings


def format_outcome(source: str, outcome: Outcome) -> List[str]:
    """Render one outcome as printable lines."""
    if isinstance(outcome, Validated):
        if outcome.report.is_valid:
            return [f"{source}: valid for type {outcome.event_type}"]
        lines = [f"{source}: invalid for type {outcome.event_type}"]
        lines.extend(f"  {error}" for error in outcome.report.errors)
        return lines
    if isinstance(outcome, UnknownType):
        return [f"{source}: unknown type {outcome.event_type}"]
    if isinstance(outcome, MissingType):
        return [f"{source}: missing type"]
    if isinstance(outcome, DecodeFailure):
        return [f"{source}: decode failure: {outcome.error}"]
    raise TypeError(f"Unsupported outcome: {outcome!r}")


def _read_body(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def cmd_validate(args: argparse.Namespace, out: TextIO) -> int:
    settings = ObserverSettings(catalogue=args.catalogue)
    observer = BeaconObserver(settings=settings)
    all_valid = True
    for path in args.paths:
        for outcome in observer.process_body(_read_body(path)):
            all_valid = all_valid and outcome.is_valid
            for line in format_outcome(path, outcome):
                print(line, file=out)
    return 0 if all_valid else 1


def cmd_catalogues(args: argparse.Namespace, out: TextIO) -> int:
    for name in list_catalogues():
        catalogue = load_catalogue(name)
        print(f"{name}: {', '.join(catalogue.event_types)}", file=out)
    return 0


def cmd_export(args: argparse.Namespace, out: TextIO) -> int:
    schemas = catalogue_to_json_schemas(load_catalogue(args.name))
    out.write(schema_to_json(schemas))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beacon-conformance",
        description="Validate captured beacon request bodies against shape catalogues",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every outcome at DEBUG level and above",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Validate raw request bodies")
    validate.add_argument(
        "paths",
        nargs="+",
        help="Files holding raw request bodies ('-' reads stdin)",
    )
    validate.add_argument(
        "--catalogue",
        default=DEFAULT_CATALOGUE,
        help=f"Catalogue to validate against (default: {DEFAULT_CATALOGUE})",
    )
    validate.set_defaults(handler=cmd_validate)

    catalogues = sub.add_parser("catalogues", help="List packaged catalogues")
    catalogues.set_defaults(handler=cmd_catalogues)

    export = sub.add_parser("export", help="Print a catalogue as JSON Schemas")
    export.add_argument("name", help="Catalogue name")
    export.set_defaults(handler=cmd_export)

    return parser


def main(argv: Optional[Sequence[str]] = None, out: Optional[TextIO] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 when every outcome is valid, 1 otherwise)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return int(args.handler(args, out or sys.stdout))
    except FileNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
