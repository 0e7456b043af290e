"""Conformance test suite for beacon-conformance.

Run: pytest --pyargs beacon_conformance.conformance
"""
from beacon_conformance.conformance.loader import (
    FixtureCase,
    load_fixtures,
    load_manifest,
)
from beacon_conformance.conformance.pytest_helpers import (
    assert_export_accepts,
    assert_payload_conforms,
    assert_payload_fails,
)

__all__ = [
    "FixtureCase",
    "assert_export_accepts",
    "assert_payload_conforms",
    "assert_payload_fails",
    "load_fixtures",
    "load_manifest",
]
