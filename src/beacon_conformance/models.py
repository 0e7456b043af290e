"""Core data models for beacon-conformance."""
from dataclasses import dataclass
from typing import Tuple


class _Missing:
    """Sentinel for a key absent from a payload mapping."""

    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class ValidationReport:
    """Ordered, path-qualified structural discrepancies for one value.

    A report is valid exactly when it carries no errors.
    """

    errors: Tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def __repr__(self) -> str:
        """Human-readable representation."""
        return (
            f"ValidationReport(valid={self.is_valid}, "
            f"errors={len(self.errors)})"
        )


# Custom Exceptions
class BeaconConformanceError(Exception):
    """Base exception for all library errors."""
    pass


class ShapeDefinitionError(BeaconConformanceError):
    """A shape declaration or catalogue entry is malformed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        location = path if path else "<root>"
        super().__init__(f"Invalid shape at {location}: {reason}")


class BodyDecodeError(BeaconConformanceError):
    """A request body could not be decoded into a JSON value."""
    pass
