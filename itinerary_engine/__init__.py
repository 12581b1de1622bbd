"""Top-level package for the itinerary consistency engine.

The engine keeps a travel itinerary coherent: it finds places where the
traveller would have to teleport between segments, estimates how long
segments without an end time last, and propagates time changes to the
segments that depend on a moved one.

The function-level API lives in :mod:`itinerary_engine.engine`; the
components behind it are in :mod:`itinerary_engine.services`.
"""

from .domain import (
    ActivitySegment,
    Address,
    CascadeMode,
    CascadeResult,
    ContinuityReport,
    CustomSegment,
    Dependency,
    DependencyCycleError,
    DependencyError,
    DurationConfidence,
    DurationEstimate,
    FillType,
    FlightSegment,
    Gap,
    GapType,
    GeoLocation,
    HotelSegment,
    InvalidSegmentError,
    ItineraryEngineError,
    Location,
    MeetingSegment,
    Segment,
    SegmentNotFoundError,
    TransferSegment,
)
from .engine import (
    adjust_dependent_segments,
    detect_location_gaps,
    get_effective_end_time,
    infer_activity_duration,
    is_same_location,
    move_segment,
    propose_fill_segment,
    sort_segments,
    validate_continuity,
)

__all__ = [
    # Engine API
    "adjust_dependent_segments",
    "detect_location_gaps",
    "get_effective_end_time",
    "infer_activity_duration",
    "is_same_location",
    "move_segment",
    "propose_fill_segment",
    "sort_segments",
    "validate_continuity",
    # Models
    "Address",
    "GeoLocation",
    "Location",
    "FlightSegment",
    "HotelSegment",
    "ActivitySegment",
    "TransferSegment",
    "MeetingSegment",
    "CustomSegment",
    "Segment",
    "Gap",
    "GapType",
    "FillType",
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
]
