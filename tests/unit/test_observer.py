"""Unit tests for the beacon observer and its log sink."""

import json
import logging
from typing import Any, Callable, Dict, List

import pydantic
import pytest

from beacon_conformance import (
    DEFAULT_ENDPOINT,
    BeaconObserver,
    DecodeFailure,
    MissingType,
    ObserverSettings,
    Outcome,
    ShapeCatalogue,
    UnknownType,
    Validated,
    ValidationReport,
    report_outcome,
)

PayloadFactory = Callable[..., Dict[str, Any]]

BEACON_URL = "https://beacon.searchspring.io/beacon/v2/8uyt2m/events"
OTHER_URL = "https://cdn.example.com/assets/app.js"


def _body(payload: Any) -> bytes:
    return json.dumps(payload).encode("utf-8")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestObserverSettings:
    """Observer configuration model."""

    def test_defaults(self) -> None:
        settings = ObserverSettings()
        assert settings.endpoint == DEFAULT_ENDPOINT == "beacon.searchspring.io"
        assert settings.catalogue == "searchspring_beacon"
        assert settings.discriminator == "type"

    def test_frozen(self) -> None:
        settings = ObserverSettings()
        with pytest.raises(pydantic.ValidationError):
            settings.endpoint = "other"  # type: ignore[misc]

    @pytest.mark.parametrize("field", ["endpoint", "catalogue", "discriminator"])
    def test_empty_values_rejected(self, field: str) -> None:
        with pytest.raises(pydantic.ValidationError):
            ObserverSettings(**{field: ""})


# ---------------------------------------------------------------------------
# Observation
# ---------------------------------------------------------------------------


class TestBeaconObserver:
    """URL filtering, decoding and dispatch."""

    def test_loads_catalogue_from_settings(self) -> None:
        observer = BeaconObserver()
        assert observer.catalogue.name == "searchspring_beacon"

    def test_explicit_catalogue(self) -> None:
        catalogue = ShapeCatalogue.from_mapping({"ping": {}}, name="tiny")
        observer = BeaconObserver(catalogue=catalogue)
        assert observer.catalogue is catalogue

    def test_matches(self) -> None:
        observer = BeaconObserver()
        assert observer.matches(BEACON_URL)
        assert not observer.matches(OTHER_URL)

    def test_custom_endpoint(self, catalogue: ShapeCatalogue) -> None:
        observer = BeaconObserver(
            catalogue, settings=ObserverSettings(endpoint="collect.example.net")
        )
        assert observer.matches("https://collect.example.net/v1")
        assert not observer.matches(BEACON_URL)

    def test_non_beacon_url_is_ignored(
        self, catalogue: ShapeCatalogue, impression: PayloadFactory
    ) -> None:
        seen: List[Outcome] = []
        observer = BeaconObserver(catalogue, on_outcome=seen.append)
        assert observer.observe(OTHER_URL, _body(impression())) == ()
        assert seen == []

    def test_valid_body(
        self, catalogue: ShapeCatalogue, impression: PayloadFactory
    ) -> None:
        observer = BeaconObserver(catalogue)
        (outcome,) = observer.observe(BEACON_URL, _body(impression()))
        assert isinstance(outcome, Validated)
        assert outcome.is_valid

    def test_batch_body(
        self, catalogue: ShapeCatalogue, impression: PayloadFactory
    ) -> None:
        observer = BeaconObserver(catalogue)
        body = _body([impression(), impression(id=None), {"type": "x"}])
        outcomes = observer.observe(BEACON_URL, body)
        assert [o.outcome for o in outcomes] == [
            "validated", "validated", "unknown_type",
        ]
        assert outcomes[1].report.errors == ("id expected string, got null",)  # type: ignore[union-attr]

    def test_decode_failure_is_contained(
        self, catalogue: ShapeCatalogue, impression: PayloadFactory
    ) -> None:
        observer = BeaconObserver(catalogue)
        (failure,) = observer.observe(BEACON_URL, b"{broken")
        assert isinstance(failure, DecodeFailure)
        assert "not valid JSON" in failure.error
        assert failure.raw == b"{broken"
        (outcome,) = observer.observe(BEACON_URL, _body(impression()))
        assert outcome.is_valid

    def test_missing_body_is_missing_type(self, catalogue: ShapeCatalogue) -> None:
        observer = BeaconObserver(catalogue)
        (outcome,) = observer.observe(BEACON_URL, None)
        assert outcome == MissingType(payload={})

    def test_on_outcome_receives_every_outcome(
        self, catalogue: ShapeCatalogue, impression: PayloadFactory
    ) -> None:
        seen: List[Outcome] = []
        observer = BeaconObserver(catalogue, on_outcome=seen.append)
        outcomes = observer.process_body(_body([impression(), {}]))
        assert tuple(seen) == outcomes

    def test_custom_discriminator(self) -> None:
        catalogue = ShapeCatalogue.from_mapping({"ping": {"n": "number"}})
        observer = BeaconObserver(
            catalogue, settings=ObserverSettings(discriminator="kind")
        )
        (outcome,) = observer.process_body(_body({"kind": "ping", "n": 1}))
        assert isinstance(outcome, Validated)
        assert outcome.is_valid


# ---------------------------------------------------------------------------
# Log sink
# ---------------------------------------------------------------------------


class TestReportOutcome:
    """Each outcome is logged once at its severity."""

    LOGGER = "beacon_conformance.observer"

    def _records(self, caplog: pytest.LogCaptureFixture, outcome: Outcome) -> List[logging.LogRecord]:
        caplog.clear()
        with caplog.at_level(logging.DEBUG, logger=self.LOGGER):
            report_outcome(outcome)
        return [r for r in caplog.records if r.name == self.LOGGER]

    def test_valid(self, caplog: pytest.LogCaptureFixture) -> None:
        outcome = Validated("product", ValidationReport(), {"type": "product"})
        (record,) = self._records(caplog, outcome)
        assert record.levelno == logging.INFO
        assert "Request structure is valid for type: product" in record.getMessage()

    def test_invalid(self, caplog: pytest.LogCaptureFixture) -> None:
        report = ValidationReport(errors=("pid expected object, got null",))
        outcome = Validated("product", report, {"type": "product", "pid": None})
        (record,) = self._records(caplog, outcome)
        assert record.levelno == logging.WARNING
        message = record.getMessage()
        assert "Request structure is invalid for type: product" in message
        assert "pid expected object, got null" in message
        assert "'pid': None" in message

    def test_unknown(self, caplog: pytest.LogCaptureFixture) -> None:
        (record,) = self._records(caplog, UnknownType("nope", {"type": "nope"}))
        assert record.levelno == logging.ERROR
        assert "No expected structure found for type: nope" in record.getMessage()

    def test_missing(self, caplog: pytest.LogCaptureFixture) -> None:
        (record,) = self._records(caplog, MissingType({"id": "x"}))
        assert record.levelno == logging.ERROR
        assert "Request type is undefined or missing" in record.getMessage()

    def test_decode_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        (record,) = self._records(caplog, DecodeFailure("Body is not valid JSON"))
        assert record.levelno == logging.ERROR
        assert record.getMessage() == "Error parsing request body: Body is not valid JSON"

    def test_observer_logs_each_outcome(
        self,
        catalogue: ShapeCatalogue,
        impression: PayloadFactory,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        observer = BeaconObserver(catalogue)
        with caplog.at_level(logging.INFO, logger=self.LOGGER):
            observer.observe(BEACON_URL, _body([impression(), {"type": "x"}]))
        levels = [r.levelno for r in caplog.records if r.name == self.LOGGER]
        assert levels == [logging.INFO, logging.ERROR]
