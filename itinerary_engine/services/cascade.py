"""Cascade adjuster - propagates a time shift along segment dependencies.

The adjuster rebuilds the dependency graph for every request, rejects
graphs that contain a cycle, then shifts the moved segment and all of
its transitive dependents by the same delta. The whole adjusted list is
computed before anything is returned; on error no segment is changed.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence, Union

from ..config import CascadeConfig, get_config
from ..domain.errors import (
    DependencyCycleError,
    DependencyError,
    InvalidSegmentError,
    SegmentNotFoundError,
)
from ..domain.models import CascadeMode, CascadeResult, Dependency, Segment
from ..graph.dependency_graph import build_dependency_graph, find_cycle, reachable_from

Delta = Union[timedelta, int]


def _as_timedelta(delta: Delta) -> timedelta:
    """Integers are milliseconds."""
    if isinstance(delta, timedelta):
        return delta
    return timedelta(milliseconds=delta)


def shift_segment(segment: Segment, delta: timedelta) -> Segment:
    """Copy of ``segment`` with start and end moved by ``delta``."""
    return dataclasses.replace(segment, start=segment.start + delta, end=segment.end + delta)


@dataclass
class CascadeAdjuster:
    """Moves a segment and everything whose timing depends on it.

    Attributes:
        config: Cascade configuration (default mode)
    """

    config: CascadeConfig = field(default_factory=lambda: get_config().cascade)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def adjust(
        self,
        segments: Sequence[Segment],
        moved_id: str,
        delta: Delta,
        mode: Optional[CascadeMode] = None,
        dependencies: Iterable[Dependency] = (),
    ) -> CascadeResult:
        """Shift ``moved_id`` and its transitive dependents by ``delta``.

        Args:
            segments: Current segments of the itinerary.
            moved_id: ID of the segment being moved.
            delta: Time shift, as a timedelta or integer milliseconds.
            mode: Graph construction mode (defaults to config).
            dependencies: Extra explicit dependencies.

        Returns:
            CascadeResult with every segment in input order; unaffected
            segments are the same objects that were passed in.

        Raises:
            SegmentNotFoundError: If ``moved_id`` is not in ``segments``.
            DependencyCycleError: If the dependency graph has a cycle.
            InvalidSegmentError: If two segments share an ID.
        """
        shift = _as_timedelta(delta)
        mode = mode or CascadeMode(self.config.default_mode)

        ids = [s.id for s in segments]
        if moved_id not in ids:
            raise SegmentNotFoundError(
                f"Segment {moved_id} not found",
                segment_id=moved_id,
            )
        if len(set(ids)) != len(ids):
            duplicate = next(i for i in ids if ids.count(i) > 1)
            raise InvalidSegmentError(
                f"Duplicate segment ID: {duplicate}",
                segment_id=duplicate,
            )

        graph = build_dependency_graph(segments, dependencies, mode)

        cycle = find_cycle(graph)
        if cycle is not None:
            self._logger.warning(
                "Dependency cycle detected",
                extra={"cycle": cycle, "moved_id": moved_id},
            )
            raise DependencyCycleError(
                f"Dependency cycle detected: {' -> '.join(cycle)}",
                cycle=tuple(cycle),
            )

        affected = reachable_from(graph, moved_id) if shift else []
        affected_set = set(affected)
        adjusted = tuple(
            shift_segment(s, shift) if s.id in affected_set else s for s in segments
        )

        self._logger.info(
            "Cascade computed",
            extra={
                "moved_id": moved_id,
                "mode": mode.value,
                "delta_seconds": shift.total_seconds(),
                "changed": len(affected),
            },
        )

        return CascadeResult(
            segments=adjusted,
            changed_ids=tuple(affected),
            moved_id=moved_id,
            delta=shift,
        )

    def adjust_safe(
        self,
        segments: Sequence[Segment],
        moved_id: str,
        delta: Delta,
        mode: Optional[CascadeMode] = None,
        dependencies: Iterable[Dependency] = (),
    ) -> CascadeResult:
        """Like adjust(), but returns dependency errors inside the result.

        Returns:
            CascadeResult; on failure ``error`` is set and ``segments`` is
            empty.
        """
        try:
            return self.adjust(segments, moved_id, delta, mode, dependencies)
        except DependencyError as e:
            return CascadeResult(
                moved_id=moved_id,
                delta=_as_timedelta(delta),
                error=e,
            )

    def move(
        self,
        segments: Sequence[Segment],
        segment_id: str,
        new_start: datetime,
        mode: Optional[CascadeMode] = None,
        dependencies: Iterable[Dependency] = (),
    ) -> CascadeResult:
        """Move a segment to a new start time, cascading to dependents.

        Raises:
            SegmentNotFoundError: If ``segment_id`` is not in ``segments``.
            DependencyCycleError: If the dependency graph has a cycle.
        """
        current = next((s for s in segments if s.id == segment_id), None)
        if current is None:
            raise SegmentNotFoundError(
                f"Segment {segment_id} not found",
                segment_id=segment_id,
            )
        return self.adjust(
            segments, segment_id, new_start - current.start, mode, dependencies
        )
