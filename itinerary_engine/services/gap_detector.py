"""Gap detection - finds unexplained changes of location in an itinerary.

Segments are sorted chronologically and each consecutive pair is
compared: the effective end location of the earlier segment against the
effective start location of the later one. Pairs that do not denote the
same place are classified, scored, and reported when the score reaches
the configured threshold.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..config import GapDetectionConfig, get_config
from ..domain.airports import city_for_code, country_for_code
from ..domain.errors import InvalidSegmentError
from ..domain.models import (
    ActivitySegment,
    ContinuityReport,
    CustomSegment,
    FillType,
    FlightSegment,
    Gap,
    GapType,
    HotelSegment,
    Location,
    MeetingSegment,
    Segment,
    TransferSegment,
)
from .location_matcher import LocationMatcher, normalize_name


def sort_segments(segments: Sequence[Segment]) -> List[Segment]:
    """Sort by start datetime; ties keep their input order."""
    return sorted(segments, key=lambda s: s.start)


def effective_start_location(segment: Segment) -> Optional[Location]:
    if isinstance(segment, FlightSegment):
        return segment.origin
    if isinstance(segment, TransferSegment):
        return segment.pickup
    if isinstance(segment, (HotelSegment, ActivitySegment, MeetingSegment, CustomSegment)):
        return segment.location
    raise InvalidSegmentError(
        f"Unsupported segment type: {type(segment).__name__}",
        segment_id=getattr(segment, "id", ""),
    )


def effective_end_location(segment: Segment) -> Optional[Location]:
    if isinstance(segment, FlightSegment):
        return segment.destination
    if isinstance(segment, TransferSegment):
        return segment.dropoff
    # Stays, activities and meetings end where they started
    if isinstance(segment, (HotelSegment, ActivitySegment, MeetingSegment, CustomSegment)):
        return segment.location
    raise InvalidSegmentError(
        f"Unsupported segment type: {type(segment).__name__}",
        segment_id=getattr(segment, "id", ""),
    )


def _has_location_data(loc: Optional[Location]) -> bool:
    if loc is None:
        return False
    return bool(
        loc.name.strip() or loc.code or loc.street or loc.city or loc.country or loc.coordinates
    )


def _city_of(loc: Location) -> str:
    return normalize_name(loc.city or city_for_code(loc.code) or "")


def _country_of(loc: Location) -> str:
    return (loc.country or country_for_code(loc.code) or "").strip().upper()


def classify_gap(end_loc: Location, start_loc: Location) -> GapType:
    """Classify the relationship between two different locations.

    Countries and cities come from the address, or from the airport
    table when the location only has a code.
    """
    end_country, start_country = _country_of(end_loc), _country_of(start_loc)
    end_city, start_city = _city_of(end_loc), _city_of(start_loc)

    if end_country and start_country and end_country != start_country:
        return GapType.INTERNATIONAL_GAP
    if end_city and start_city:
        if end_city == start_city:
            return GapType.LOCAL_TRANSFER
        if end_country and start_country:
            return GapType.DOMESTIC_GAP
    return GapType.UNKNOWN


def suggest_fill_type(gap_type: GapType) -> FillType:
    if gap_type in (GapType.DOMESTIC_GAP, GapType.INTERNATIONAL_GAP):
        return FillType.FLIGHT
    return FillType.TRANSFER


def describe_gap(end_loc: Location, start_loc: Location, gap_type: GapType) -> str:
    end_name = end_loc.display_name()
    start_name = start_loc.display_name()
    if gap_type == GapType.LOCAL_TRANSFER:
        return f"Local transfer needed from {end_name} to {start_name}"
    if gap_type == GapType.DOMESTIC_GAP:
        return f"Domestic transportation needed from {end_name} to {start_name}"
    if gap_type == GapType.INTERNATIONAL_GAP:
        return f"International flight needed from {end_name} to {start_name}"
    return f"Transportation gap between {end_name} and {start_name}"


def is_airport_segment(segment: Segment) -> bool:
    """Flights, and transfers picking up or dropping off at a coded place."""
    if isinstance(segment, FlightSegment):
        return True
    if isinstance(segment, TransferSegment):
        return bool(
            (segment.pickup and segment.pickup.code)
            or (segment.dropoff and segment.dropoff.code)
        )
    return False


@dataclass
class GapDetector:
    """Detects geographic gaps between chronologically adjacent segments.

    Attributes:
        config: Confidence table and reporting threshold
        matcher: Location matcher deciding "same place"
    """

    config: GapDetectionConfig = field(default_factory=lambda: get_config().gaps)
    matcher: LocationMatcher = field(default_factory=LocationMatcher)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def detect_location_gaps(self, segments: Sequence[Segment]) -> List[Gap]:
        """Detect geographic gaps in an itinerary.

        Pairs with a missing location are skipped rather than reported.
        Gap indexes refer to the chronologically sorted list.

        Args:
            segments: Segments in any order.

        Returns:
            Gaps whose confidence reaches the configured threshold.
        """
        ordered = sort_segments(segments)
        gaps: List[Gap] = []

        for i in range(len(ordered) - 1):
            before, after = ordered[i], ordered[i + 1]
            gap = self._check_pair(i, before, after)
            if gap is not None:
                gaps.append(gap)

        self._logger.info(
            "Gap detection complete",
            extra={"segments": len(ordered), "gaps": len(gaps)},
        )
        return gaps

    def validate_continuity(self, segments: Sequence[Segment]) -> ContinuityReport:
        """Run gap detection and summarize the result."""
        gaps = self.detect_location_gaps(segments)
        if not gaps:
            summary = (
                "All segments are geographically continuous. "
                "No transportation gaps detected."
            )
        else:
            lines = [
                f"{n}. {gap.description} (suggested: {gap.suggested_type.value})"
                for n, gap in enumerate(gaps, start=1)
            ]
            summary = f"Found {len(gaps)} geographic gap(s):\n" + "\n".join(lines)

        return ContinuityReport(
            valid=not gaps,
            gaps=tuple(gaps),
            segment_count=len(segments),
            summary=summary,
        )

    def calculate_confidence(
        self, gap_type: GapType, before: Segment, after: Segment
    ) -> int:
        """Score how certain it is that a transport segment is missing."""
        table = self.config.confidence
        cross_city = gap_type in (GapType.DOMESTIC_GAP, GapType.INTERNATIONAL_GAP)
        before_airport = is_airport_segment(before)
        after_airport = is_airport_segment(after)
        before_hotel = isinstance(before, HotelSegment)
        after_hotel = isinstance(after, HotelSegment)
        venue_types = (HotelSegment, ActivitySegment)

        if before_airport and after_airport and cross_city:
            return table.airport_to_airport
        if before_airport and isinstance(after, venue_types):
            return table.airport_to_venue
        if after_airport and isinstance(before, venue_types):
            return table.airport_to_venue
        if before_hotel and after_hotel and cross_city:
            return table.hotel_to_hotel_cross_city
        if before_hotel and not after_hotel and not after_airport:
            return table.hotel_to_other
        if after_hotel and not before_hotel and not before_airport:
            return table.hotel_to_other
        if gap_type == GapType.LOCAL_TRANSFER:
            return table.local_transfer
        return table.fallback

    def _check_pair(self, index: int, before: Segment, after: Segment) -> Optional[Gap]:
        end_loc = effective_end_location(before)
        start_loc = effective_start_location(after)
        if not _has_location_data(end_loc) or not _has_location_data(start_loc):
            self._logger.debug(
                "Pair skipped, missing location",
                extra={"before": before.id, "after": after.id},
            )
            return None

        if self.matcher.is_same_location(end_loc, start_loc):
            return None

        gap_type = classify_gap(end_loc, start_loc)
        confidence = self.calculate_confidence(gap_type, before, after)

        self._logger.debug(
            "Location change found",
            extra={
                "before": before.id,
                "after": after.id,
                "gap_type": gap_type.value,
                "confidence": confidence,
            },
        )

        if confidence < self.config.confidence_threshold:
            return None

        return Gap(
            before_index=index,
            after_index=index + 1,
            before_segment=before,
            after_segment=after,
            end_location=end_loc,
            start_location=start_loc,
            gap_type=gap_type,
            confidence=confidence,
            description=describe_gap(end_loc, start_loc, gap_type),
            suggested_type=suggest_fill_type(gap_type),
        )
