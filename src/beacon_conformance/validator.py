"""Recursive structural comparator for decoded beacon payloads.

``validate`` walks a payload value and a shape side by side and collects
every discrepancy, each prefixed with the dotted/bracketed path at which it
occurred. Errors are ordered by a pre-order walk of the shape: object keys
in declaration order, array elements in index order.

Two wordings exist for an absent field, depending on the declared shape:

    {"a": {"b": "string"}} vs {"a": None}  ->  "a is missing"
    {"a": "string"}        vs {}           ->  "a expected string, got undefined"

A nested object shape checks presence first and treats any falsy value as
missing. Primitive and array shapes report the observed kind instead.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, List, Union

from pydantic import JsonValue

from beacon_conformance.models import MISSING, ValidationReport
from beacon_conformance.shapes import (
    ARRAY,
    ArrayShape,
    ObjectShape,
    PrimitiveShape,
    parse_shape,
)

_UNDEFINED = "undefined"
_NULL = "null"
_BOOLEAN = "boolean"
_NUMBER = "number"
_STRING = "string"
_ARRAY = "array"
_OBJECT = "object"


def kind_of(value: Any) -> str:
    """Return the kind label reported for *value* in diagnostics."""
    if value is MISSING:
        return _UNDEFINED
    if value is None:
        return _NULL
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return _BOOLEAN
    if isinstance(value, (int, float)):
        return _NUMBER
    if isinstance(value, str):
        return _STRING
    if isinstance(value, (list, tuple)):
        return _ARRAY
    return _OBJECT


def is_falsy(value: Any) -> bool:
    """True for absent, None, False, zero, NaN and the empty string.

    Empty lists and mappings are present containers, not falsy.
    """
    if value is MISSING or value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value == ""
    return False


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _lookup(value: Any, key: str) -> Any:
    if isinstance(value, Mapping) and key in value:
        return value[key]
    return MISSING


def _child_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _walk(
    value: Any,
    shape: Union[PrimitiveShape, ObjectShape, ArrayShape],
    path: str,
    errors: List[str],
) -> None:
    if isinstance(shape, ArrayShape):
        if not _is_sequence(value):
            errors.append(f"{path} expected array, got {kind_of(value)}")
            return
        for index, item in enumerate(value):
            _walk(item, shape.element, f"{path}[{index}]", errors)
        return

    if isinstance(shape, PrimitiveShape):
        if shape.marker == ARRAY:
            if not _is_sequence(value):
                errors.append(f"{path} expected array, got {kind_of(value)}")
            return
        actual = kind_of(value)
        if actual != shape.marker:
            errors.append(f"{path} expected {shape.marker}, got {actual}")
        return

    for key, child_shape in shape.properties.items():
        new_path = _child_path(path, key)
        child = _lookup(value, key)
        if isinstance(child_shape, ObjectShape):
            if is_falsy(child):
                errors.append(f"{new_path} is missing")
                continue
        _walk(child, child_shape, new_path, errors)


def validate(value: JsonValue, shape: Any, path: str = "") -> ValidationReport:
    """Compare *value* against *shape* and report every discrepancy.

    Args:
        value: A decoded JSON value.
        shape: A PrimitiveShape, ObjectShape or ArrayShape, or the compact
            declaration form accepted by :func:`parse_shape`.
        path: Path prefix for error messages ("" at the top level).

    Returns:
        ValidationReport whose errors are in pre-order walk order.

    Raises:
        ShapeDefinitionError: If *shape* is a malformed declaration.
    """
    errors: List[str] = []
    _walk(value, parse_shape(shape), path, errors)
    return ValidationReport(errors=tuple(errors))
