"""Reusable test helpers for beacon-conformance testing.

Consumers can import these to write their own conformance assertions:
    from beacon_conformance.conformance.pytest_helpers import (
        assert_payload_conforms,
        assert_payload_fails,
        assert_export_accepts,
    )
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from beacon_conformance.catalogues import load_catalogue
from beacon_conformance.export import shape_to_json_schema
from beacon_conformance.models import ValidationReport
from beacon_conformance.shapes import ObjectShape, ShapeCatalogue
from beacon_conformance.validator import validate


@lru_cache(maxsize=None)
def _default_catalogue() -> ShapeCatalogue:
    return load_catalogue()


def _shape_for(event_type: str, catalogue: Optional[ShapeCatalogue]) -> ObjectShape:
    if catalogue is None:
        catalogue = _default_catalogue()
    shape = catalogue.get(event_type)
    if shape is None:
        raise ValueError(
            f"Unknown event type: {event_type!r}. "
            f"Known types: {catalogue.event_types}"
        )
    return shape


def assert_payload_conforms(
    payload: Any,
    event_type: str,
    catalogue: Optional[ShapeCatalogue] = None,
) -> ValidationReport:
    """Assert a payload matches the catalogue shape for *event_type*."""
    report = validate(payload, _shape_for(event_type, catalogue))
    if not report.is_valid:
        raise AssertionError(
            f"Payload for {event_type!r} failed conformance:\n"
            + "\n".join(f"  {error}" for error in report.errors)
        )
    return report


def assert_payload_fails(
    payload: Any,
    event_type: str,
    catalogue: Optional[ShapeCatalogue] = None,
) -> ValidationReport:
    """Assert a payload DOES NOT match (expected invalid)."""
    report = validate(payload, _shape_for(event_type, catalogue))
    if report.is_valid:
        raise AssertionError(
            f"Payload for {event_type!r} was expected to fail but passed conformance."
        )
    return report


def assert_export_accepts(
    payload: Any,
    event_type: str,
    catalogue: Optional[ShapeCatalogue] = None,
) -> None:
    """Assert the exported JSON Schema for *event_type* accepts *payload*.

    Raises:
        ImportError: If jsonschema is not installed.
    """
    try:
        from jsonschema import Draft202012Validator
    except ImportError:
        raise ImportError(
            "jsonschema is required for export conformance checks. "
            "Install with: pip install 'beacon-conformance[conformance]'"
        )

    schema = shape_to_json_schema(_shape_for(event_type, catalogue))
    errors = list(Draft202012Validator(schema).iter_errors(payload))
    if errors:
        raise AssertionError(
            f"Exported schema for {event_type!r} rejected payload:\n"
            + "\n".join(f"  {list(e.absolute_path)}: {e.message}" for e in errors)
        )
