"""Services layer - The consistency engine components.

Available services:
- LocationMatcher: Decides whether two locations are the same place
- GapDetector: Finds and scores geographic gaps between segments
- DurationInferencer: Estimates durations of segments without end times
- CascadeAdjuster: Propagates time shifts along segment dependencies
- GapFiller: Proposes placeholder segments for detected gaps
- ItineraryConsistencyService: Wires the engine to its ports
"""

from .cascade import CascadeAdjuster
from .consistency_service import ItineraryConsistencyService
from .duration_inference import DurationInferencer
from .gap_detector import GapDetector
from .gap_filler import GapFiller
from .location_matcher import LocationMatcher

__all__ = [
    "LocationMatcher",
    "GapDetector",
    "DurationInferencer",
    "CascadeAdjuster",
    "GapFiller",
    "ItineraryConsistencyService",
]
