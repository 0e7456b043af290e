"""Packaged shape catalogues for beacon-conformance."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from beacon_conformance.models import ShapeDefinitionError
from beacon_conformance.shapes import ShapeCatalogue

_CATALOGUE_DIR = Path(__file__).parent

DEFAULT_CATALOGUE: str = "searchspring_beacon"


def catalogue_path(name: str) -> Path:
    """Return filesystem path to a packaged catalogue file."""
    path = _CATALOGUE_DIR / f"{name}.catalogue.json"
    if not path.exists():
        raise FileNotFoundError(
            f"No catalogue found for '{name}'. Available: {list_catalogues()}"
        )
    return path


def load_catalogue(name: str = DEFAULT_CATALOGUE) -> ShapeCatalogue:
    """Load and parse a packaged catalogue by name."""
    text = catalogue_path(name).read_text(encoding="utf-8")
    try:
        raw: Dict[str, Any] = json.loads(text)
    except json.JSONDecodeError as e:
        raise ShapeDefinitionError("", f"catalogue {name!r} is not valid JSON: {e}") from e
    return ShapeCatalogue.from_mapping(raw, name=name)


def list_catalogues() -> List[str]:
    """List all available catalogue names."""
    return sorted(
        p.name[: -len(".catalogue.json")]
        for p in _CATALOGUE_DIR.glob("*.catalogue.json")
    )
