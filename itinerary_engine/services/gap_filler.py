"""Placeholder proposals for detected gaps.

A proposal is an unsaved Flight or Transfer segment, marked as inferred,
timed to sit between the two segments flanking the gap. Inserting it
into an itinerary is left to the caller.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable

from ..domain.models import (
    FillType,
    FlightSegment,
    Gap,
    Location,
    Segment,
    TransferSegment,
)
from .duration_inference import DurationInferencer

FLIGHT_BUFFER = timedelta(hours=2)
TRANSFER_BUFFER = timedelta(minutes=15)
MIN_FLIGHT_WINDOW = timedelta(hours=1)
MIN_TRANSFER_WINDOW = timedelta(minutes=30)


def _new_segment_id() -> str:
    return f"seg_{uuid.uuid4().hex[:12]}"


@dataclass
class GapFiller:
    """Proposes placeholder segments that bridge detected gaps.

    Attributes:
        durations: Used to find when the earlier segment really ends
        id_factory: Generates IDs for proposed segments
    """

    durations: DurationInferencer = field(default_factory=DurationInferencer)
    id_factory: Callable[[], str] = _new_segment_id
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def propose_fill_segment(self, gap: Gap) -> Segment:
        """Build a placeholder segment for a gap.

        The window opens after the earlier segment's effective end plus a
        buffer (2 h before a flight, 15 min before a transfer) and closes
        just before the later segment starts. When that leaves no room the
        window is pulled back to a minimum length before the later
        segment, which may overlap the earlier one.

        Args:
            gap: Gap returned by the detector.

        Returns:
            An inferred FlightSegment or TransferSegment.
        """
        is_flight = gap.suggested_type == FillType.FLIGHT
        before_end = self.durations.get_effective_end_time(gap.before_segment)
        after_start = gap.after_segment.start

        end = after_start - timedelta(milliseconds=1)
        start = before_end + (FLIGHT_BUFFER if is_flight else TRANSFER_BUFFER)
        if start >= end:
            start = after_start - (MIN_FLIGHT_WINDOW if is_flight else MIN_TRANSFER_WINDOW)
            self._logger.warning(
                "Tight schedule for gap fill",
                extra={
                    "from": gap.end_location.display_name(),
                    "to": gap.start_location.display_name(),
                },
            )

        if is_flight:
            return self._flight(gap, start, end)
        return self._transfer(gap, start, end)

    def _flight(self, gap: Gap, start: datetime, end: datetime) -> FlightSegment:
        return FlightSegment(
            id=self.id_factory(),
            start=start,
            end=end,
            origin=_with_fallback_name(gap.end_location, "Unknown Origin"),
            destination=_with_fallback_name(gap.start_location, "Unknown Destination"),
            flight_number="XX0000",
            airline="Unknown",
            notes="Placeholder flight - please verify and update with actual flight details",
            inferred=True,
            inferred_reason=gap.description,
        )

    def _transfer(self, gap: Gap, start: datetime, end: datetime) -> TransferSegment:
        return TransferSegment(
            id=self.id_factory(),
            start=start,
            end=end,
            pickup=_with_fallback_name(gap.end_location, "Unknown Pickup"),
            dropoff=_with_fallback_name(gap.start_location, "Unknown Dropoff"),
            transfer_type="PRIVATE",
            notes="Placeholder transfer - please verify and update with actual transfer details",
            inferred=True,
            inferred_reason=gap.description,
        )


def _with_fallback_name(location: Location, fallback: str) -> Location:
    if location.name:
        return location
    return Location(
        name=fallback,
        code=location.code,
        address=location.address,
        coordinates=location.coordinates,
    )
