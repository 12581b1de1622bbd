"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the engine. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    DependencyCycleError,
    DependencyError,
    InvalidSegmentError,
    ItineraryEngineError,
    SegmentNotFoundError,
)
from .models import (
    ActivitySegment,
    Address,
    BaseSegment,
    CascadeMode,
    CascadeResult,
    ContinuityReport,
    CustomSegment,
    Dependency,
    DurationConfidence,
    DurationEstimate,
    FillType,
    FlightSegment,
    Gap,
    GapType,
    GeoLocation,
    HotelSegment,
    Location,
    MeetingSegment,
    Segment,
    SegmentKind,
    TransferSegment,
)

__all__ = [
    # Models
    "Address",
    "GeoLocation",
    "Location",
    "SegmentKind",
    "BaseSegment",
    "FlightSegment",
    "HotelSegment",
    "ActivitySegment",
    "TransferSegment",
    "MeetingSegment",
    "CustomSegment",
    "Segment",
    "GapType",
    "FillType",
    "Gap",
    "ContinuityReport",
    "DurationConfidence",
    "DurationEstimate",
    "Dependency",
    "CascadeMode",
    "CascadeResult",
    # Errors
    "ItineraryEngineError",
    "DependencyError",
    "DependencyCycleError",
    "SegmentNotFoundError",
    "InvalidSegmentError",
    "ConfigurationError",
]
