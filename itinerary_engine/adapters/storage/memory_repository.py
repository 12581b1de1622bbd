"""Thread-safe in-memory segment repository.

Backs tests and in-process callers that hold itineraries in memory.
Updates of one call are applied all together or not at all.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ...domain.errors import SegmentNotFoundError
from ...domain.models import Segment
from ...ports.segments import TimeUpdates


@dataclass
class InMemorySegmentRepository:
    """Segment repository keeping itineraries in a dict.

    This adapter implements SegmentRepositoryPort.

    Example:
        repo = InMemorySegmentRepository()
        repo.save_segments("trip-1", segments)
        repo.load_segments("trip-1")
    """

    _store: Dict[str, List[Segment]] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def save_segments(self, itinerary_id: str, segments: Sequence[Segment]) -> None:
        with self._lock:
            self._store[itinerary_id] = list(segments)

    def load_segments(self, itinerary_id: str) -> Sequence[Segment]:
        """Return a snapshot of an itinerary's segments.

        Raises:
            KeyError: If the itinerary does not exist.
        """
        with self._lock:
            if itinerary_id not in self._store:
                raise KeyError(f"Itinerary not found: {itinerary_id}")
            return tuple(self._store[itinerary_id])

    def apply_time_updates(self, itinerary_id: str, updates: TimeUpdates) -> None:
        """Apply new times to several segments in one step.

        Raises:
            KeyError: If the itinerary does not exist.
            SegmentNotFoundError: If an update names an unknown segment;
                nothing is written in that case.
        """
        with self._lock:
            if itinerary_id not in self._store:
                raise KeyError(f"Itinerary not found: {itinerary_id}")

            current = self._store[itinerary_id]
            known = {s.id for s in current}
            missing = [sid for sid in updates if sid not in known]
            if missing:
                raise SegmentNotFoundError(
                    f"Segments not found: {', '.join(missing)}",
                    segment_id=missing[0],
                )

            self._store[itinerary_id] = [
                dataclasses.replace(s, start=updates[s.id][0], end=updates[s.id][1])
                if s.id in updates
                else s
                for s in current
            ]
            self._logger.debug(
                "Segment times updated",
                extra={"itinerary_id": itinerary_id, "updated": len(updates)},
            )
