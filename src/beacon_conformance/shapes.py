"""Expected-shape descriptions and shape catalogues.

Shapes are a tagged union of three immutable forms, discriminated by
``kind``:

    PrimitiveShape  -- asserts the runtime kind of a value
    ObjectShape     -- ordered mapping of required keys to nested shapes
    ArrayShape      -- one shape applied to every element of a sequence

Configuration data declares shapes in a compact form (a marker string, a
mapping, or a single-element list). :func:`parse_shape` turns that form
into the tagged union so the validator never has to guess what a raw
schema value means.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, FrozenSet, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from beacon_conformance.models import ShapeDefinitionError

# ── Section 1: Constants ─────────────────────────────────────────────────────

STRING: str = "string"
NUMBER: str = "number"
BOOLEAN: str = "boolean"
OBJECT: str = "object"
ARRAY: str = "array"

PRIMITIVE_MARKERS: FrozenSet[str] = frozenset({
    STRING,
    NUMBER,
    BOOLEAN,
    OBJECT,
    ARRAY,
})

Marker = Literal["string", "number", "boolean", "object", "array"]

# ── Section 2: Shape Models ──────────────────────────────────────────────────


class PrimitiveShape(BaseModel):
    """Asserts the runtime kind of a value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["primitive"] = "primitive"
    marker: Marker = Field(
        ..., description="Kind label the value must report"
    )


class ObjectShape(BaseModel):
    """Mapping of required keys to nested shapes, in declaration order."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["object"] = "object"
    properties: Dict[str, Shape] = Field(
        default_factory=dict,
        description="Required keys and their expected shapes",
    )


class ArrayShape(BaseModel):
    """Applies one element shape to every element of a sequence."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    element: Shape = Field(
        ..., description="Shape every element must satisfy"
    )


Shape = Annotated[
    Union[PrimitiveShape, ObjectShape, ArrayShape],
    Field(discriminator="kind"),
]

ObjectShape.model_rebuild()
ArrayShape.model_rebuild()

_SHAPE_TYPES = (PrimitiveShape, ObjectShape, ArrayShape)


def _child_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def parse_shape(raw: Any, path: str = "") -> Union[PrimitiveShape, ObjectShape, ArrayShape]:
    """Convert a compact shape declaration into the tagged union.

    Args:
        raw: A primitive marker string, a mapping of key to declaration,
            a single-element list, or an already-parsed shape.
        path: Location of *raw* inside the enclosing declaration, used in
            error messages.

    Returns:
        The equivalent PrimitiveShape, ObjectShape or ArrayShape.

    Raises:
        ShapeDefinitionError: If *raw* is not one of the accepted forms.
    """
    if isinstance(raw, _SHAPE_TYPES):
        return raw

    if isinstance(raw, str):
        if raw not in PRIMITIVE_MARKERS:
            raise ShapeDefinitionError(
                path,
                f"unknown primitive marker {raw!r}; "
                f"expected one of {sorted(PRIMITIVE_MARKERS)}",
            )
        return PrimitiveShape(marker=raw)  # type: ignore[arg-type]

    if isinstance(raw, Mapping):
        properties: Dict[str, Union[PrimitiveShape, ObjectShape, ArrayShape]] = {}
        for key, declaration in raw.items():
            if not isinstance(key, str):
                raise ShapeDefinitionError(
                    path, f"object keys must be strings, got {key!r}"
                )
            properties[key] = parse_shape(declaration, _child_path(path, key))
        return ObjectShape(properties=properties)

    if isinstance(raw, (list, tuple)):
        if len(raw) != 1:
            raise ShapeDefinitionError(
                path,
                f"array shape must have exactly one element, got {len(raw)}",
            )
        return ArrayShape(element=parse_shape(raw[0], f"{path}[]"))

    raise ShapeDefinitionError(
        path, f"unsupported declaration of type {type(raw).__name__}"
    )


# ── Section 3: Catalogue ─────────────────────────────────────────────────────


class ShapeCatalogue(BaseModel):
    """Immutable mapping from event-type discriminator to object shape."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        default="custom",
        min_length=1,
        description="Catalogue identifier (e.g., 'searchspring_beacon')",
    )
    shapes: Dict[str, ObjectShape] = Field(
        default_factory=dict,
        description="Top-level object shape per event type, in declaration order",
    )

    @classmethod
    def from_mapping(
        cls, raw: Mapping[str, Any], name: str = "custom"
    ) -> "ShapeCatalogue":
        """Build a catalogue from compact shape declarations.

        Raises:
            ShapeDefinitionError: If a declaration is malformed or a
                top-level entry is not an object shape.
        """
        if not isinstance(raw, Mapping):
            raise ShapeDefinitionError(
                "", f"catalogue must be a mapping, got {type(raw).__name__}"
            )
        shapes: Dict[str, ObjectShape] = {}
        for event_type, declaration in raw.items():
            if not isinstance(event_type, str) or not event_type:
                raise ShapeDefinitionError(
                    "", f"event types must be non-empty strings, got {event_type!r}"
                )
            shape = parse_shape(declaration, event_type)
            if not isinstance(shape, ObjectShape):
                raise ShapeDefinitionError(
                    event_type, "top-level catalogue entries must be object shapes"
                )
            shapes[event_type] = shape
        return cls(name=name, shapes=shapes)

    @property
    def event_types(self) -> List[str]:
        return list(self.shapes)

    def get(self, event_type: str) -> Optional[ObjectShape]:
        return self.shapes.get(event_type)

    def __contains__(self, event_type: object) -> bool:
        return event_type in self.shapes

    def __len__(self) -> int:
        return len(self.shapes)

    def __repr__(self) -> str:
        """Human-readable representation."""
        return f"ShapeCatalogue(name={self.name}, event_types={len(self.shapes)})"
