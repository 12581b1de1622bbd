"""Geocoding port - Optional enrichment of locations with coordinates.

Coordinates sharpen location matching; without them the matcher falls
back to names. Implementations live outside the engine (any network
call belongs to them).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import GeoLocation, Location


class GeocoderPort(Protocol):
    """Port for geocoding services."""

    def geocode(self, location: Location) -> Optional[GeoLocation]:
        """Find coordinates for a location.

        Args:
            location: The location to geocode (name, code, address).

        Returns:
            Coordinates, or None if the location could not be resolved.
        """
        ...
