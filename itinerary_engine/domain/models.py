"""Immutable domain models for the itinerary consistency engine.

All models are frozen dataclasses with slots. Segments form a closed set
of variants (flight, hotel, activity, transfer, meeting, custom) sharing
a common base; components dispatch on the concrete class and reject
anything outside the set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Union

from .errors import InvalidSegmentError


class SegmentKind(str, Enum):
    """Discriminant of a segment variant."""

    FLIGHT = "FLIGHT"
    HOTEL = "HOTEL"
    ACTIVITY = "ACTIVITY"
    TRANSFER = "TRANSFER"
    MEETING = "MEETING"
    CUSTOM = "CUSTOM"


class GapType(str, Enum):
    """Classification of a geographic gap between two segments."""

    LOCAL_TRANSFER = "LOCAL_TRANSFER"
    DOMESTIC_GAP = "DOMESTIC_GAP"
    INTERNATIONAL_GAP = "INTERNATIONAL_GAP"
    UNKNOWN = "UNKNOWN"


class FillType(str, Enum):
    """Segment kind suggested to fill a gap."""

    FLIGHT = "FLIGHT"
    TRANSFER = "TRANSFER"


class DurationConfidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CascadeMode(str, Enum):
    """How the dependency graph is built for a cascade.

    AUTO combines explicit declarations with chronological adjacency;
    DEPENDENCIES_ONLY follows explicit declarations alone.
    """

    AUTO = "auto"
    DEPENDENCIES_ONLY = "dependencies-only"


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """GPS coordinates representing a geographic location."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )


@dataclass(frozen=True, slots=True)
class Address:
    """Postal address of a location. Every field is optional."""

    street: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Location:
    """A place referenced by a segment.

    No field is required: matching and classification degrade to
    whatever data is present.

    Attributes:
        name: Free-text name (venue, airport, hotel...)
        code: Optional 1-3 character airport/station code
        address: Optional postal address
        coordinates: Optional GPS coordinates
    """

    name: str = ""
    code: Optional[str] = None
    address: Optional[Address] = None
    coordinates: Optional[GeoLocation] = None

    @property
    def city(self) -> Optional[str]:
        return self.address.city if self.address else None

    @property
    def country(self) -> Optional[str]:
        return self.address.country if self.address else None

    @property
    def street(self) -> Optional[str]:
        return self.address.street if self.address else None

    def display_name(self) -> str:
        """Name with its code or city appended when available."""
        if self.code:
            return f"{self.name} ({self.code})" if self.name else self.code
        if self.city:
            return f"{self.name}, {self.city}" if self.name else self.city
        return self.name or "unknown location"


@dataclass(frozen=True, slots=True, kw_only=True)
class BaseSegment:
    """Fields shared by every segment variant.

    Attributes:
        id: Unique segment identifier
        start: Start datetime
        end: End datetime (may equal start when unknown)
        notes: Free-text notes
        depends_on: IDs of segments whose end time this segment follows
        inferred: True for segments synthesized to fill a gap
        inferred_reason: Why the segment was synthesized
    """

    id: str
    start: datetime
    end: datetime
    notes: str = ""
    depends_on: tuple[str, ...] = ()
    inferred: bool = False
    inferred_reason: str = ""

    def __post_init__(self) -> None:
        """Reject segments ending before they start."""
        if self.end < self.start:
            raise InvalidSegmentError(
                f"Segment {self.id} ends before it starts",
                segment_id=self.id,
            )

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True, slots=True, kw_only=True)
class FlightSegment(BaseSegment):
    origin: Optional[Location] = None
    destination: Optional[Location] = None
    flight_number: str = ""
    airline: str = ""

    kind = SegmentKind.FLIGHT


@dataclass(frozen=True, slots=True, kw_only=True)
class HotelSegment(BaseSegment):
    location: Optional[Location] = None
    property_name: str = ""

    kind = SegmentKind.HOTEL


@dataclass(frozen=True, slots=True, kw_only=True)
class ActivitySegment(BaseSegment):
    name: str = ""
    location: Optional[Location] = None
    description: str = ""
    category: str = ""

    kind = SegmentKind.ACTIVITY


@dataclass(frozen=True, slots=True, kw_only=True)
class TransferSegment(BaseSegment):
    pickup: Optional[Location] = None
    dropoff: Optional[Location] = None
    transfer_type: str = ""

    kind = SegmentKind.TRANSFER


@dataclass(frozen=True, slots=True, kw_only=True)
class MeetingSegment(BaseSegment):
    title: str = ""
    location: Optional[Location] = None
    agenda: str = ""

    kind = SegmentKind.MEETING


@dataclass(frozen=True, slots=True, kw_only=True)
class CustomSegment(BaseSegment):
    title: str = ""
    location: Optional[Location] = None
    description: str = ""

    kind = SegmentKind.CUSTOM


Segment = Union[
    FlightSegment,
    HotelSegment,
    ActivitySegment,
    TransferSegment,
    MeetingSegment,
    CustomSegment,
]

SEGMENT_TYPES: tuple[type, ...] = (
    FlightSegment,
    HotelSegment,
    ActivitySegment,
    TransferSegment,
    MeetingSegment,
    CustomSegment,
)


@dataclass(frozen=True, slots=True)
class Gap:
    """Unexplained change of location between two adjacent segments.

    Gaps are recomputed on every detection pass and never mutated.

    Attributes:
        before_index: Index of the earlier segment in the sorted list
        after_index: Index of the later segment in the sorted list
        before_segment: The earlier segment
        after_segment: The later segment
        end_location: Effective end location of the earlier segment
        start_location: Effective start location of the later segment
        gap_type: Classification of the gap
        confidence: 0-100 certainty that a transport segment is missing
        description: Human-readable description
        suggested_type: Segment kind suggested to fill the gap
    """

    before_index: int
    after_index: int
    before_segment: Segment
    after_segment: Segment
    end_location: Location
    start_location: Location
    gap_type: GapType
    confidence: int
    description: str
    suggested_type: FillType

    @property
    def before_id(self) -> str:
        return self.before_segment.id

    @property
    def after_id(self) -> str:
        return self.after_segment.id


@dataclass(frozen=True, slots=True)
class ContinuityReport:
    """Result of a continuity validation pass."""

    valid: bool
    gaps: tuple[Gap, ...]
    segment_count: int
    summary: str


@dataclass(frozen=True, slots=True)
class DurationEstimate:
    """Inferred duration of a segment.

    Attributes:
        hours: Duration in hours
        confidence: How reliable the estimate is
        reason: Which rule produced the estimate
    """

    hours: float
    confidence: DurationConfidence
    reason: str

    @property
    def as_timedelta(self) -> timedelta:
        return timedelta(hours=self.hours)


@dataclass(frozen=True, slots=True)
class Dependency:
    """Directed timing edge: ``dependent_id`` follows ``depended_on_id``."""

    depended_on_id: str
    dependent_id: str


@dataclass(frozen=True, slots=True)
class CascadeResult:
    """Outcome of a cascade request.

    Exactly one of ``segments`` (on success) or ``error`` is meaningful.
    On error ``segments`` is empty and nothing must be applied.

    Attributes:
        segments: Every input segment, shifted ones replaced, in input order
        changed_ids: IDs of the shifted segments, moved segment first
        moved_id: ID of the segment the caller moved
        delta: Time shift applied to every changed segment
        error: The dependency error that aborted the cascade, if any
    """

    segments: tuple[Segment, ...] = field(default_factory=tuple)
    changed_ids: tuple[str, ...] = field(default_factory=tuple)
    moved_id: str = ""
    delta: timedelta = timedelta(0)
    error: Optional[Exception] = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def changed_segments(self) -> tuple[Segment, ...]:
        changed = set(self.changed_ids)
        return tuple(s for s in self.segments if s.id in changed)

    @property
    def dependents_adjusted(self) -> int:
        """Number of shifted segments other than the moved one."""
        return max(len(self.changed_ids) - 1, 0)
