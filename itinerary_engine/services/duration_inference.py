"""Duration inference - estimates how long a segment lasts.

Segments imported without an end time carry ``end == start``. Gap
filling needs a realistic end time to avoid placing a transfer on top
of an activity, so the duration is inferred from keywords found in the
segment's text. Rules are checked in priority order and the first hit
wins; an unmatched segment always falls back to two hours.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from ..domain.errors import InvalidSegmentError
from ..domain.models import (
    ActivitySegment,
    CustomSegment,
    DurationConfidence,
    DurationEstimate,
    FlightSegment,
    HotelSegment,
    MeetingSegment,
    Segment,
    TransferSegment,
)

HIGH = DurationConfidence.HIGH
MEDIUM = DurationConfidence.MEDIUM
LOW = DurationConfidence.LOW

# (keywords, hours, confidence, reason), in priority order
_MEAL_RULES: List[Tuple[Tuple[str, ...], float, DurationConfidence, str]] = [
    (("breakfast",), 1.0, HIGH, "Standard breakfast duration"),
    (("brunch",), 1.5, HIGH, "Standard brunch duration"),
    (("lunch",), 1.5, HIGH, "Standard lunch duration"),
    (("dinner",), 2.0, HIGH, "Standard dinner duration"),
    (("cocktail", "drinks"), 1.5, MEDIUM, "Standard cocktail/drinks duration"),
]

# movie before show: "movie show" is a movie
_ENTERTAINMENT_RULES = [
    (("movie", "film", "cinema"), 2.0, HIGH, "Standard movie duration"),
    (("show", "broadway", "theatre", "theater"), 2.5, HIGH, "Standard show/theater duration"),
    (("concert",), 2.5, HIGH, "Standard concert duration"),
    (("opera", "ballet"), 3.0, HIGH, "Standard opera/ballet duration"),
]

_ACTIVITY_RULES = [
    (("tour",), 3.0, MEDIUM, "Standard tour duration"),
    (("museum", "gallery", "exhibition"), 2.0, MEDIUM, "Standard museum/gallery visit duration"),
    (("spa", "massage"), 2.0, MEDIUM, "Standard spa/massage duration"),
    (("golf",), 4.0, MEDIUM, "Standard golf round duration"),
    (("hike", "hiking"), 3.0, MEDIUM, "Standard hiking duration"),
    (("wine tasting", "vineyard"), 2.0, MEDIUM, "Standard wine tasting duration"),
    (("cooking class", "culinary"), 3.0, MEDIUM, "Standard cooking class duration"),
    (("shopping",), 2.0, MEDIUM, "Standard shopping duration"),
]

_MEETING_ESTIMATE = DurationEstimate(1.0, MEDIUM, "Standard meeting duration")

_LATE_RULES = [
    (("game", "match", "sporting"), 3.0, MEDIUM, "Standard sporting event duration"),
    (("workshop", "class", "lesson"), 2.0, MEDIUM, "Standard workshop/class duration"),
]

DEFAULT_ESTIMATE = DurationEstimate(2.0, LOW, "Default duration for unknown activity type")


def _searchable_text(segment: Segment) -> str:
    if isinstance(segment, ActivitySegment):
        parts = [segment.name, segment.description, segment.category]
        location = segment.location
    elif isinstance(segment, MeetingSegment):
        parts = [segment.title, segment.agenda]
        location = segment.location
    elif isinstance(segment, CustomSegment):
        parts = [segment.title, segment.description]
        location = segment.location
    elif isinstance(segment, HotelSegment):
        parts = [segment.property_name]
        location = segment.location
    elif isinstance(segment, FlightSegment):
        parts = []
        location = segment.destination
    elif isinstance(segment, TransferSegment):
        parts = []
        location = segment.dropoff
    else:
        raise InvalidSegmentError(
            f"Unsupported segment type: {type(segment).__name__}",
            segment_id=getattr(segment, "id", ""),
        )

    if location is not None:
        parts.append(location.name)
    parts.append(segment.notes)
    return " ".join(p for p in parts if p).lower()


def _match(text: str, rules) -> Optional[DurationEstimate]:
    for keywords, hours, confidence, reason in rules:
        if any(k in text for k in keywords):
            return DurationEstimate(hours, confidence, reason)
    return None


@dataclass
class DurationInferencer:
    """Infers segment durations from explicit times or keyword patterns."""

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def infer_activity_duration(self, segment: Segment) -> DurationEstimate:
        """Estimate how long a segment lasts.

        A segment whose end is later than its start keeps its actual
        duration. Otherwise the first matching keyword rule applies, and
        the two-hour default when none does. Never fails for a valid
        segment.

        Args:
            segment: Segment to estimate.

        Returns:
            DurationEstimate with hours, confidence and reason.
        """
        actual = segment.end - segment.start
        if actual > timedelta(0):
            return DurationEstimate(
                actual / timedelta(hours=1),
                HIGH,
                "Actual duration from segment timestamps",
            )

        text = _searchable_text(segment)
        estimate = self._infer_from_text(text, segment)
        self._logger.debug(
            "Duration inferred",
            extra={
                "segment_id": segment.id,
                "hours": estimate.hours,
                "confidence": estimate.confidence.value,
            },
        )
        return estimate

    def get_effective_end_time(self, segment: Segment) -> datetime:
        """Explicit end when later than start, else start + inferred duration."""
        if segment.end > segment.start:
            return segment.end
        return segment.start + self.infer_activity_duration(segment).as_timedelta

    @staticmethod
    def _infer_from_text(text: str, segment: Segment) -> DurationEstimate:
        for rules in (_MEAL_RULES, _ENTERTAINMENT_RULES, _ACTIVITY_RULES):
            estimate = _match(text, rules)
            if estimate is not None:
                return estimate

        if isinstance(segment, MeetingSegment) or "meeting" in text:
            return _MEETING_ESTIMATE

        return _match(text, _LATE_RULES) or DEFAULT_ESTIMATE
