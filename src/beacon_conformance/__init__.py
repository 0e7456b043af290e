"""
beacon-conformance: Structural validation of analytics beacon payloads.

This library checks decoded beacon request bodies against a catalogue of
expected shapes keyed by the payload's event type, and reports every
structural discrepancy with the path at which it occurred.

Example:
    >>> from beacon_conformance import load_catalogue, route
    >>> catalogue = load_catalogue("searchspring_beacon")
    >>> (outcome,) = route({"type": "profile.unknown"}, catalogue)
    >>> outcome.outcome
    'unknown_type'

Catalogue Notes:
    Catalogues are static configuration data shipped under
    ``beacon_conformance/catalogues`` as ``<name>.catalogue.json``. Each
    maps an event-type discriminator to a compact shape declaration:

        "string" | "number" | "boolean" | "object" | "array"
            primitive markers
        {"key": <declaration>, ...}
            object shape; every key is required
        [<declaration>]
            array shape applied to every element

    Declarations are parsed once into immutable PrimitiveShape /
    ObjectShape / ArrayShape models and passed explicitly to a Dispatcher.
"""

__version__ = "1.0.0"

# Core data models
from beacon_conformance.models import (
    MISSING,
    ValidationReport,
    BeaconConformanceError,
    ShapeDefinitionError,
    BodyDecodeError,
)

# Shapes and catalogues
from beacon_conformance.shapes import (
    PRIMITIVE_MARKERS,
    PrimitiveShape,
    ObjectShape,
    ArrayShape,
    Shape,
    ShapeCatalogue,
    parse_shape,
)
from beacon_conformance.catalogues import (
    DEFAULT_CATALOGUE,
    catalogue_path,
    list_catalogues,
    load_catalogue,
)

# Validation and dispatch
from beacon_conformance.validator import kind_of, is_falsy, validate
from beacon_conformance.dispatcher import (
    DEFAULT_DISCRIMINATOR,
    Validated,
    UnknownType,
    MissingType,
    DecodeFailure,
    Outcome,
    Dispatcher,
    route,
)

# Request boundary
from beacon_conformance.decoding import decode_body
from beacon_conformance.observer import (
    DEFAULT_ENDPOINT,
    ObserverSettings,
    BeaconObserver,
    report_outcome,
)

# JSON Schema export
from beacon_conformance.export import (
    catalogue_to_json_schemas,
    schema_to_json,
    shape_to_json_schema,
)

__all__ = [
    # Core data models
    "MISSING",
    "ValidationReport",
    "BeaconConformanceError",
    "ShapeDefinitionError",
    "BodyDecodeError",
    # Shapes and catalogues
    "PRIMITIVE_MARKERS",
    "PrimitiveShape",
    "ObjectShape",
    "ArrayShape",
    "Shape",
    "ShapeCatalogue",
    "parse_shape",
    "DEFAULT_CATALOGUE",
    "catalogue_path",
    "list_catalogues",
    "load_catalogue",
    # Validation and dispatch
    "kind_of",
    "is_falsy",
    "validate",
    "DEFAULT_DISCRIMINATOR",
    "Validated",
    "UnknownType",
    "MissingType",
    "DecodeFailure",
    "Outcome",
    "Dispatcher",
    "route",
    # Request boundary
    "decode_body",
    "DEFAULT_ENDPOINT",
    "ObserverSettings",
    "BeaconObserver",
    "report_outcome",
    # JSON Schema export
    "catalogue_to_json_schemas",
    "schema_to_json",
    "shape_to_json_schema",
]
