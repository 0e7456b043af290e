"""Beacon request observation: URL filtering, decoding, dispatch, log sink."""

import logging
from typing import Callable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from beacon_conformance.catalogues import DEFAULT_CATALOGUE, load_catalogue
from beacon_conformance.decoding import decode_body
from beacon_conformance.dispatcher import (
    DEFAULT_DISCRIMINATOR,
    DecodeFailure,
    Dispatcher,
    MissingType,
    Outcome,
    UnknownType,
    Validated,
)
from beacon_conformance.models import BodyDecodeError
from beacon_conformance.shapes import ShapeCatalogue

logger = logging.getLogger("beacon_conformance.observer")

DEFAULT_ENDPOINT: str = "beacon.searchspring.io"


class ObserverSettings(BaseModel):
    """Runtime configuration for a BeaconObserver."""

    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        min_length=1,
        description="URL fragment identifying beacon requests",
    )
    catalogue: str = Field(
        default=DEFAULT_CATALOGUE,
        min_length=1,
        description="Name of the packaged catalogue to load when none is given",
    )
    discriminator: str = Field(
        default=DEFAULT_DISCRIMINATOR,
        min_length=1,
        description="Payload key naming the event type",
    )


def report_outcome(outcome: Outcome) -> None:
    """Emit one outcome to the observer log."""
    if isinstance(outcome, Validated):
        if outcome.report.is_valid:
            logger.info(
                "Request structure is valid for type: %s %r",
                outcome.event_type,
                outcome.payload,
            )
        else:
            logger.warning(
                "Request structure is invalid for type: %s\n"
                "Validation errors: %s\n"
                "Actual request body: %r",
                outcome.event_type,
                list(outcome.report.errors),
                outcome.payload,
            )
    elif isinstance(outcome, UnknownType):
        logger.error(
            "No expected structure found for type: %s %r",
            outcome.event_type,
            outcome.payload,
        )
    elif isinstance(outcome, MissingType):
        logger.error("Request type is undefined or missing: %r", outcome.payload)
    elif isinstance(outcome, DecodeFailure):
        logger.error("Error parsing request body: %s", outcome.error)


class BeaconObserver:
    """Feeds captured beacon requests through decode, dispatch and logging.

    Args:
        catalogue: Shapes to validate against. Loaded from
            ``settings.catalogue`` when omitted.
        settings: Endpoint, catalogue and discriminator configuration.
        on_outcome: Optional callback invoked with every outcome after it
            has been logged.
    """

    def __init__(
        self,
        catalogue: Optional[ShapeCatalogue] = None,
        settings: Optional[ObserverSettings] = None,
        on_outcome: Optional[Callable[[Outcome], None]] = None,
    ) -> None:
        self.settings = settings or ObserverSettings()
        if catalogue is None:
            catalogue = load_catalogue(self.settings.catalogue)
        self.dispatcher = Dispatcher(
            catalogue, discriminator=self.settings.discriminator
        )
        self.on_outcome = on_outcome

    @property
    def catalogue(self) -> ShapeCatalogue:
        return self.dispatcher.catalogue

    def matches(self, url: str) -> bool:
        return self.settings.endpoint in url

    def observe(self, url: str, body: Optional[bytes]) -> Tuple[Outcome, ...]:
        """Process one captured request; non-beacon URLs are ignored."""
        if not self.matches(url):
            return ()
        return self.process_body(body)

    def process_body(self, body: Optional[bytes]) -> Tuple[Outcome, ...]:
        """Decode and route a body; decode errors become a DecodeFailure."""
        try:
            payload = decode_body(body)
        except BodyDecodeError as e:
            outcomes: Tuple[Outcome, ...] = (DecodeFailure(error=str(e), raw=body),)
        else:
            outcomes = self.dispatcher.route(payload)

        for outcome in outcomes:
            report_outcome(outcome)
            if self.on_outcome is not None:
                self.on_outcome(outcome)
        return outcomes
