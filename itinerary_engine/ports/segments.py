"""Segment persistence port - Abstraction over the itinerary store.

The engine never persists anything itself. Callers that want to apply
a cascade go through this port so that all updates of one move reach
the store in a single call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Protocol, Sequence, Tuple

if TYPE_CHECKING:
    from datetime import datetime

    from ..domain.models import Segment

# segment ID -> (new start, new end)
TimeUpdates = Mapping[str, Tuple["datetime", "datetime"]]


class SegmentRepositoryPort(Protocol):
    """Port for loading and updating an itinerary's segments.

    Implementation: adapters/storage/memory_repository.py
    """

    def load_segments(self, itinerary_id: str) -> Sequence[Segment]:
        """Load the current segments of an itinerary.

        Args:
            itinerary_id: The itinerary to load.

        Returns:
            The itinerary's segments in stored order.

        Raises:
            KeyError: If the itinerary does not exist.
        """
        ...

    def apply_time_updates(self, itinerary_id: str, updates: TimeUpdates) -> None:
        """Write new start/end times for several segments at once.

        Implementations must apply all updates or none.

        Args:
            itinerary_id: The itinerary to update.
            updates: New (start, end) per segment ID.
        """
        ...
