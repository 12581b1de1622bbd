"""Ports layer - Abstract interfaces (Protocols) for external collaborators.

Ports define the contracts between the engine and the systems around
it: the segment store that supplies and receives segments, and an
optional geocoder that adds coordinates to locations.
"""

from .geocoding import GeocoderPort
from .segments import SegmentRepositoryPort, TimeUpdates

__all__ = [
    "GeocoderPort",
    "SegmentRepositoryPort",
    "TimeUpdates",
]
