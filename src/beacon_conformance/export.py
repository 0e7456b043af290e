"""JSON Schema export for catalogue shapes."""
from __future__ import annotations

import json
from typing import Any, Dict, Union

from beacon_conformance.shapes import (
    ArrayShape,
    ObjectShape,
    PrimitiveShape,
    ShapeCatalogue,
)

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


def shape_to_json_schema(
    shape: Union[PrimitiveShape, ObjectShape, ArrayShape],
) -> Dict[str, Any]:
    """Render a shape as a JSON Schema fragment.

    Args:
        shape: Shape to render.

    Returns:
        Schema dict using only ``type``, ``properties``, ``required`` and
        ``items``.
    """
    if isinstance(shape, PrimitiveShape):
        return {"type": shape.marker}
    if isinstance(shape, ArrayShape):
        return {"type": "array", "items": shape_to_json_schema(shape.element)}
    return {
        "type": "object",
        "properties": {
            key: shape_to_json_schema(child)
            for key, child in shape.properties.items()
        },
        "required": list(shape.properties),
    }


def catalogue_to_json_schemas(catalogue: ShapeCatalogue) -> Dict[str, Dict[str, Any]]:
    """Render every catalogue entry as a standalone JSON Schema.

    Returns:
        Dict mapping event type to schema dict with $schema and $id fields
    """
    schemas: Dict[str, Dict[str, Any]] = {}
    for event_type, shape in catalogue.shapes.items():
        schema = shape_to_json_schema(shape)
        schema["$schema"] = JSON_SCHEMA_DIALECT
        schema["$id"] = f"beacon-conformance/{catalogue.name}/{event_type}"
        schemas[event_type] = schema
    return schemas


def schema_to_json(schema: Dict[str, Any]) -> str:
    """Serialize schema to deterministic JSON string.

    Args:
        schema: JSON Schema dict

    Returns:
        Formatted JSON string with trailing newline
    """
    return json.dumps(schema, indent=2, sort_keys=True) + "\n"
