"""Geocoding adapters - Implementations of GeocoderPort.

Available implementations:
- LookupGeocoderAdapter: Fixed table of known places
"""

from .lookup_geocoder import LookupGeocoderAdapter

__all__ = ["LookupGeocoderAdapter"]
