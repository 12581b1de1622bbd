"""Itinerary consistency service - Main orchestrator.

Connects the engine to its collaborators: segments come from the
repository port, locations may be enriched by a geocoder port, and the
result of a move is written back through the repository in one call.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from ..domain.errors import InvalidSegmentError
from ..domain.models import (
    ActivitySegment,
    CascadeMode,
    CascadeResult,
    ContinuityReport,
    CustomSegment,
    Dependency,
    FlightSegment,
    Gap,
    HotelSegment,
    Location,
    MeetingSegment,
    Segment,
    TransferSegment,
)
from ..ports.geocoding import GeocoderPort
from ..ports.segments import SegmentRepositoryPort
from .cascade import CascadeAdjuster
from .gap_detector import GapDetector
from .gap_filler import GapFiller


@dataclass
class ItineraryConsistencyService:
    """Runs consistency checks and cascaded moves for stored itineraries.

    Attributes:
        repository: Supplies segments and accepts time updates
        gap_detector: Detects geographic gaps
        cascade_adjuster: Computes cascaded moves
        gap_filler: Proposes placeholder segments for gaps
        geocoder: Optional coordinate enrichment before detection
    """

    repository: SegmentRepositoryPort
    gap_detector: GapDetector = field(default_factory=GapDetector)
    cascade_adjuster: CascadeAdjuster = field(default_factory=CascadeAdjuster)
    gap_filler: GapFiller = field(default_factory=GapFiller)
    geocoder: Optional[GeocoderPort] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def find_gaps(self, itinerary_id: str) -> List[Gap]:
        """Detect gaps in a stored itinerary."""
        segments = self._load(itinerary_id)
        return self.gap_detector.detect_location_gaps(segments)

    def validate(self, itinerary_id: str) -> ContinuityReport:
        """Continuity report for a stored itinerary."""
        segments = self._load(itinerary_id)
        return self.gap_detector.validate_continuity(segments)

    def propose_fills(self, itinerary_id: str) -> List[Segment]:
        """Placeholder segments for every gap, not saved."""
        return [self.gap_filler.propose_fill_segment(g) for g in self.find_gaps(itinerary_id)]

    def move_segment(
        self,
        itinerary_id: str,
        segment_id: str,
        new_start: datetime,
        mode: Optional[CascadeMode] = None,
        dependencies: Iterable[Dependency] = (),
    ) -> CascadeResult:
        """Move a segment and persist every cascaded change at once.

        Dependency errors are returned in the result and nothing is
        written. Repository errors propagate.

        Returns:
            The CascadeResult that was applied (or refused).
        """
        segments = self.repository.load_segments(itinerary_id)
        current = next((s for s in segments if s.id == segment_id), None)
        delta = new_start - current.start if current is not None else 0

        result = self.cascade_adjuster.adjust_safe(
            segments, segment_id, delta, mode, dependencies
        )
        if not result.is_success:
            self._logger.warning(
                "Move refused",
                extra={
                    "itinerary_id": itinerary_id,
                    "segment_id": segment_id,
                    "error": str(result.error),
                },
            )
            return result

        changed = result.changed_segments
        if changed:
            self.repository.apply_time_updates(
                itinerary_id, {s.id: (s.start, s.end) for s in changed}
            )

        self._logger.info(
            "Segment moved",
            extra={
                "itinerary_id": itinerary_id,
                "segment_id": segment_id,
                "dependents_adjusted": result.dependents_adjusted,
            },
        )
        return result

    def _load(self, itinerary_id: str) -> Sequence[Segment]:
        segments = self.repository.load_segments(itinerary_id)
        if self.geocoder is None:
            return segments
        return [self._enrich(s) for s in segments]

    def _enrich(self, segment: Segment) -> Segment:
        if isinstance(segment, FlightSegment):
            return dataclasses.replace(
                segment,
                origin=self._geocode(segment.origin),
                destination=self._geocode(segment.destination),
            )
        if isinstance(segment, TransferSegment):
            return dataclasses.replace(
                segment,
                pickup=self._geocode(segment.pickup),
                dropoff=self._geocode(segment.dropoff),
            )
        if isinstance(segment, (HotelSegment, ActivitySegment, MeetingSegment, CustomSegment)):
            return dataclasses.replace(segment, location=self._geocode(segment.location))
        raise InvalidSegmentError(
            f"Unsupported segment type: {type(segment).__name__}",
            segment_id=getattr(segment, "id", ""),
        )

    def _geocode(self, location: Optional[Location]) -> Optional[Location]:
        if location is None or location.coordinates is not None or self.geocoder is None:
            return location
        coordinates = self.geocoder.geocode(location)
        if coordinates is None:
            return location
        return dataclasses.replace(location, coordinates=coordinates)
