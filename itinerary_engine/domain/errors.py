"""Typed domain errors for the itinerary consistency engine.

All errors inherit from ItineraryEngineError and can optionally
wrap a root cause exception for debugging.

Expected cascade failures (cycle, unknown segment) derive from
DependencyError so callers can handle them as one family. Contract
violations by the caller raise InvalidSegmentError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ItineraryEngineError(Exception):
    """Base error for the itinerary engine domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class DependencyError(ItineraryEngineError):
    """A requested cascade cannot be computed."""


@dataclass
class DependencyCycleError(DependencyError):
    """The dependency graph built from current data is not a DAG.

    Attributes:
        cycle: Segment IDs forming the cycle, first ID repeated at the end
    """

    cycle: tuple[str, ...] = ()


@dataclass
class SegmentNotFoundError(DependencyError):
    """The moved segment does not exist in the supplied list.

    Attributes:
        segment_id: The ID that was not found
    """

    segment_id: str = ""


@dataclass
class InvalidSegmentError(ItineraryEngineError):
    """A segment violates the engine's input contract.

    Raised for objects outside the closed set of segment variants and
    for segments whose end precedes their start.

    Attributes:
        segment_id: ID of the offending segment, when it has one
    """

    segment_id: str = ""


@dataclass
class ConfigurationError(ItineraryEngineError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
