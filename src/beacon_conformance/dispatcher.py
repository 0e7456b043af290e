"""Route decoded payloads to the shape named by their discriminator."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, Tuple, Union

from pydantic import JsonValue

from beacon_conformance.models import ValidationReport
from beacon_conformance.shapes import ShapeCatalogue
from beacon_conformance.validator import is_falsy, validate

logger = logging.getLogger("beacon_conformance.dispatcher")

DEFAULT_DISCRIMINATOR: str = "type"


@dataclass(frozen=True)
class Validated:
    """Payload checked against the shape for its declared type."""

    event_type: str
    report: ValidationReport
    payload: Any
    outcome: Literal["validated"] = "validated"

    @property
    def is_valid(self) -> bool:
        return self.report.is_valid


@dataclass(frozen=True)
class UnknownType:
    """Declared type has no shape in the catalogue."""

    event_type: str
    payload: Any
    outcome: Literal["unknown_type"] = "unknown_type"

    @property
    def is_valid(self) -> bool:
        return False


@dataclass(frozen=True)
class MissingType:
    """Payload declares no type."""

    payload: Any
    outcome: Literal["missing_type"] = "missing_type"

    @property
    def is_valid(self) -> bool:
        return False


@dataclass(frozen=True)
class DecodeFailure:
    """Request body could not be decoded into a payload."""

    error: str
    raw: Any = None
    outcome: Literal["decode_failure"] = "decode_failure"

    @property
    def is_valid(self) -> bool:
        return False


Outcome = Union[Validated, UnknownType, MissingType, DecodeFailure]


class Dispatcher:
    """Selects the catalogue shape for each payload and validates it.

    Args:
        catalogue: Shapes keyed by event type.
        discriminator: Payload key naming the event type.
    """

    def __init__(
        self,
        catalogue: ShapeCatalogue,
        discriminator: str = DEFAULT_DISCRIMINATOR,
    ) -> None:
        self.catalogue = catalogue
        self.discriminator = discriminator

    def route(self, payload: JsonValue) -> Tuple[Outcome, ...]:
        """Route a payload, or each element of a list of payloads.

        Elements are routed independently and in order; one bad element
        never stops the rest.
        """
        if isinstance(payload, list):
            return tuple(self.route_one(item) for item in payload)
        return (self.route_one(payload),)

    def route_one(self, payload: JsonValue) -> Outcome:
        declared: Any = None
        if isinstance(payload, Mapping):
            declared = payload.get(self.discriminator)

        if is_falsy(declared):
            logger.debug("Payload has no %r discriminator", self.discriminator)
            return MissingType(payload=payload)

        event_type = declared if isinstance(declared, str) else json.dumps(declared)
        shape = self.catalogue.get(event_type)
        if shape is None:
            logger.debug(
                "No shape for event type %r in catalogue %s",
                event_type,
                self.catalogue.name,
            )
            return UnknownType(event_type=event_type, payload=payload)

        return Validated(
            event_type=event_type,
            report=validate(payload, shape, ""),
            payload=payload,
        )


def route(
    payload: JsonValue,
    catalogue: Union[ShapeCatalogue, Mapping[str, Any]],
    discriminator: str = DEFAULT_DISCRIMINATOR,
) -> Tuple[Outcome, ...]:
    """Route *payload* against *catalogue* (parsed first if given as raw declarations)."""
    if not isinstance(catalogue, ShapeCatalogue):
        catalogue = ShapeCatalogue.from_mapping(catalogue)
    return Dispatcher(catalogue, discriminator=discriminator).route(payload)
