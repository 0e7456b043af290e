"""Shared pytest fixtures for all tests."""
import copy
from typing import Any, Callable, Dict

import pytest

from beacon_conformance import ShapeCatalogue, load_catalogue

_PROFILE_IMPRESSION: Dict[str, Any] = {
    "category": "beacon.recommendations",
    "context": {
        "userId": "user-1",
        "sessionId": "session-1",
        "website": {"trackingCode": "8uyt2m"},
    },
    "event": {
        "context": {
            "type": "product-recommendation",
            "tag": "similar",
            "placement": "product-page",
        },
        "profile": {"tag": "similar", "placement": "product-page"},
    },
    "id": "evt-1",
    "type": "profile.impression",
}


def make_impression(**overrides: Any) -> Dict[str, Any]:
    """Build a valid profile.impression payload.

    Top-level keys are replaced by *overrides*; nested edits are done by
    the caller on the returned copy.
    """
    payload = copy.deepcopy(_PROFILE_IMPRESSION)
    payload.update(overrides)
    return payload


@pytest.fixture
def catalogue() -> ShapeCatalogue:
    """The packaged searchspring_beacon catalogue."""
    return load_catalogue("searchspring_beacon")


@pytest.fixture
def impression() -> Callable[..., Dict[str, Any]]:
    """Factory for valid profile.impression payloads."""
    return make_impression
