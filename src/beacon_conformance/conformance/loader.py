"""Canonical fixture loading for beacon-conformance testing.

Provides FixtureCase (frozen dataclass) and load_fixtures() for data-driven
conformance tests. Reads from the bundled manifest.json and fixture JSON files.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

_FIXTURES_DIR = Path(__file__).parent / "fixtures"
_MANIFEST_PATH = _FIXTURES_DIR / "manifest.json"

_VALID_CATEGORIES = frozenset({"events", "edge_cases"})

_VALID_OUTCOMES = frozenset({
    "validated", "unknown_type", "missing_type", "decode_failure",
})


@dataclass(frozen=True)
class FixtureCase:
    """A single fixture test case loaded from the manifest."""

    id: str
    payload: Any
    expected_valid: bool
    event_type: Optional[str]
    notes: str
    expected_outcome: str
    expected_errors: Tuple[str, ...]


def load_manifest() -> Dict[str, Any]:
    """Return the parsed fixture manifest."""
    with open(_MANIFEST_PATH, "r", encoding="utf-8") as fh:
        manifest: Dict[str, Any] = json.load(fh)
    return manifest


def load_fixtures(category: str) -> List[FixtureCase]:
    """Load canonical fixture cases for a category.

    Args:
        category: One of ``"events"`` or ``"edge_cases"``.

    Returns:
        List of :class:`FixtureCase` instances with payloads loaded from JSON.

    Raises:
        ValueError: If *category* is not recognised, or a manifest entry
            names an unknown outcome.
        FileNotFoundError: If the manifest or a referenced fixture file is missing.
    """
    if category not in _VALID_CATEGORIES:
        raise ValueError(
            f"Unknown fixture category: {category!r}. "
            f"Valid categories: {sorted(_VALID_CATEGORIES)}"
        )

    fixtures: List[FixtureCase] = []

    entries: List[Dict[str, Any]] = load_manifest()["fixtures"]
    for entry in entries:
        fixture_path: str = entry["path"]
        if not fixture_path.startswith(category + "/"):
            continue

        outcome: str = entry["expected_outcome"]
        if outcome not in _VALID_OUTCOMES:
            raise ValueError(
                f"Unknown expected_outcome {outcome!r} in manifest entry "
                f"{entry.get('id', '?')!r}. "
                f"Known outcomes: {sorted(_VALID_OUTCOMES)}"
            )

        full_path = _FIXTURES_DIR / fixture_path
        if not full_path.exists():
            raise FileNotFoundError(
                f"Fixture file referenced in manifest does not exist: {full_path}"
            )

        with open(full_path, "r", encoding="utf-8") as fh:
            payload: Any = json.load(fh)

        fixtures.append(
            FixtureCase(
                id=entry["id"],
                payload=payload,
                expected_valid=entry["expected_result"] == "valid",
                event_type=entry["event_type"],
                notes=entry["notes"],
                expected_outcome=outcome,
                expected_errors=tuple(entry.get("expected_errors", ())),
            )
        )

    return fixtures
