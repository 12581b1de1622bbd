"""Function-level entry points to the consistency engine.

These helpers are what import pipelines and tool executors call. Each
builds its component from the current configuration (or the one passed
in) and runs one pure computation over the given data.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from .config import AppConfig, get_config
from .domain.models import (
    CascadeMode,
    CascadeResult,
    ContinuityReport,
    Dependency,
    DurationEstimate,
    Gap,
    Location,
    Segment,
)
from .services.cascade import CascadeAdjuster, Delta
from .services.duration_inference import DurationInferencer
from .services.gap_detector import GapDetector, sort_segments
from .services.gap_filler import GapFiller
from .services.location_matcher import LocationMatcher


def _detector(config: Optional[AppConfig]) -> GapDetector:
    config = config or get_config()
    return GapDetector(config=config.gaps, matcher=LocationMatcher(config.matching))


def is_same_location(a: Location, b: Location, config: Optional[AppConfig] = None) -> bool:
    """True when both locations denote the same physical place."""
    config = config or get_config()
    return LocationMatcher(config.matching).is_same_location(a, b)


def detect_location_gaps(
    segments: Sequence[Segment], config: Optional[AppConfig] = None
) -> List[Gap]:
    """Gaps between consecutive segments, at or above the threshold."""
    return _detector(config).detect_location_gaps(segments)


def validate_continuity(
    segments: Sequence[Segment], config: Optional[AppConfig] = None
) -> ContinuityReport:
    return _detector(config).validate_continuity(segments)


def infer_activity_duration(segment: Segment) -> DurationEstimate:
    return DurationInferencer().infer_activity_duration(segment)


def get_effective_end_time(segment: Segment) -> datetime:
    return DurationInferencer().get_effective_end_time(segment)


def propose_fill_segment(gap: Gap) -> Segment:
    """Unsaved placeholder Flight or Transfer bridging ``gap``."""
    return GapFiller().propose_fill_segment(gap)


def adjust_dependent_segments(
    segments: Sequence[Segment],
    moved_id: str,
    delta: Delta,
    mode: Optional[CascadeMode] = None,
    dependencies: Iterable[Dependency] = (),
    config: Optional[AppConfig] = None,
) -> CascadeResult:
    """Shift a segment and its transitive dependents by ``delta``.

    Never raises for a missing segment or a dependency cycle: the
    returned result carries the error and no segments instead.
    """
    config = config or get_config()
    return CascadeAdjuster(config.cascade).adjust_safe(
        segments, moved_id, delta, mode, dependencies
    )


def move_segment(
    segments: Sequence[Segment],
    segment_id: str,
    new_start: datetime,
    mode: Optional[CascadeMode] = None,
    dependencies: Iterable[Dependency] = (),
    config: Optional[AppConfig] = None,
) -> CascadeResult:
    """Move a segment to ``new_start`` with cascade; errors are returned."""
    current = next((s for s in segments if s.id == segment_id), None)
    delta = new_start - current.start if current is not None else 0
    return adjust_dependent_segments(segments, segment_id, delta, mode, dependencies, config)


__all__ = [
    "adjust_dependent_segments",
    "detect_location_gaps",
    "get_effective_end_time",
    "infer_activity_duration",
    "is_same_location",
    "move_segment",
    "propose_fill_segment",
    "sort_segments",
    "validate_continuity",
]
