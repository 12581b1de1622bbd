"""Lookup-table geocoder adapter.

Resolves locations against a fixed table of known places, keyed by
code or by normalized name. Useful offline and in tests; network
geocoders implement the same GeocoderPort outside the engine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from ...domain.models import GeoLocation, Location
from ...services.location_matcher import normalize_name


@dataclass
class LookupGeocoderAdapter:
    """Geocoder backed by an in-memory table.

    This adapter implements GeocoderPort.

    Attributes:
        places: Known places, keyed by code or plain name
    """

    places: Mapping[str, GeoLocation] = field(default_factory=dict)

    _index: Dict[str, GeoLocation] = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._index = {}
        for key, coords in self.places.items():
            self._index[key.strip().upper()] = coords
            self._index[normalize_name(key)] = coords

    def geocode(self, location: Location) -> Optional[GeoLocation]:
        """Look up a location by code first, then by normalized name."""
        if location.code:
            hit = self._index.get(location.code.strip().upper())
            if hit is not None:
                return hit

        name = normalize_name(location.name)
        if name and name in self._index:
            return self._index[name]

        self._logger.debug(
            "Geocode returned no result",
            extra={"location": location.display_name()},
        )
        return None
