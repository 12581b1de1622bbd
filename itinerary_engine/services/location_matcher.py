"""Location matching - decides whether two references denote one place.

Checks run in a fixed order and stop at the first decisive signal:

1. Both sides carry a code: code equality decides.
2. Both sides carry coordinates: haversine distance within threshold.
3. One side's street address equals the other side's name.
4. Normalized names are equal.
5. One normalized name contains the other.
6. Fuzzy overlap of significant words.

Anything else is a different place. Being in the same city is never
enough on its own.
"""

from __future__ import annotations

import logging
import math
import re
import unicodedata
from dataclasses import dataclass, field
from typing import List, Sequence

from rapidfuzz.distance import Levenshtein

from ..config import MatchingConfig, get_config
from ..domain.models import GeoLocation, Location

EARTH_RADIUS_METERS = 6_371_000

# Trailing words dropped from names before comparison
_NAME_SUFFIXES = {"airport", "international", "intl", "hotel", "resort"}

# Generic words ignored by the fuzzy word comparison
_STOP_WORDS = {
    "the", "at", "in", "on", "of", "and", "a", "an", "to", "for",
    "resort", "hotel", "inn", "suites", "lodge", "airport", "international",
    "st", "ave", "blvd", "rd", "street", "avenue", "boulevard", "road",
    "drive", "lane", "way", "place", "collection", "luxury",
}

# Substring containment only counts for names longer than this
_MIN_CONTAINMENT_LENGTH = 5

logger = logging.getLogger(__name__)


def haversine_distance(a: GeoLocation, b: GeoLocation) -> float:
    """Great-circle distance in meters between two coordinates."""
    lat1_rad = math.radians(a.latitude)
    lat2_rad = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_METERS * c


def normalize_name(text: str) -> str:
    """Lower-case, strip accents and punctuation, collapse whitespace and
    drop trailing generic suffixes ("airport", "hotel", ...)."""
    if not text:
        return ""
    normalized = unicodedata.normalize("NFD", text)
    normalized = "".join(ch for ch in normalized if unicodedata.category(ch) != "Mn")
    normalized = normalized.lower()
    normalized = re.sub(r"[^\w\s]", " ", normalized)
    words = normalized.split()
    while words and words[-1] in _NAME_SUFFIXES:
        words.pop()
    return " ".join(words)


def significant_words(normalized: str) -> List[str]:
    return [w for w in normalized.split() if len(w) > 2 and w not in _STOP_WORDS]


def words_similar(a: str, b: str) -> bool:
    """Exact, substring, or within edit distance (2 for long words, else 1)."""
    if a == b:
        return True
    if a in b or b in a:
        return True
    max_distance = 2 if len(a) > 5 or len(b) > 5 else 1
    return Levenshtein.distance(a, b, score_cutoff=max_distance) <= max_distance


def _short_code(loc: Location) -> str:
    """Upper-cased code when it is 1-3 characters long, else empty."""
    code = (loc.code or "").strip().upper()
    return code if len(code) <= 3 else ""


def _matched_count(words: Sequence[str], others: Sequence[str]) -> int:
    return sum(1 for w in words if any(words_similar(w, o) for o in others))


@dataclass
class LocationMatcher:
    """Decides whether two locations denote the same physical place.

    Ambiguous evidence resolves to "different": a missed gap is cheaper
    than a spurious one. The result is symmetric in its arguments.

    Attributes:
        config: Matching thresholds
    """

    config: MatchingConfig = field(default_factory=lambda: get_config().matching)

    def is_same_location(self, a: Location, b: Location) -> bool:
        code_a, code_b = _short_code(a), _short_code(b)
        if code_a and code_b:
            same = code_a == code_b
            logger.debug(
                "Location codes compared",
                extra={"code_a": a.code, "code_b": b.code, "match": same},
            )
            return same

        if self._coordinates_close(a, b):
            return True

        name_a = normalize_name(a.name)
        name_b = normalize_name(b.name)

        if self._address_matches_name(a, name_b) or self._address_matches_name(b, name_a):
            return True

        if name_a and name_a == name_b:
            return True

        if not name_a and not name_b:
            # Names made only of generic words ("Airport", "Hotel") compare raw
            raw_a = " ".join(a.name.lower().split())
            raw_b = " ".join(b.name.lower().split())
            return bool(raw_a) and raw_a == raw_b

        if not name_a or not name_b:
            return False

        if len(name_a) > _MIN_CONTAINMENT_LENGTH and len(name_b) > _MIN_CONTAINMENT_LENGTH:
            if name_a in name_b or name_b in name_a:
                return True

        return self._have_similar_words(name_a, name_b)

    def _coordinates_close(self, a: Location, b: Location) -> bool:
        if a.coordinates is None or b.coordinates is None:
            return False
        distance = haversine_distance(a.coordinates, b.coordinates)
        return distance <= self.config.coordinate_threshold_meters

    @staticmethod
    def _address_matches_name(loc: Location, other_name: str) -> bool:
        if not loc.street or not other_name:
            return False
        return normalize_name(loc.street) == other_name

    def _have_similar_words(self, name_a: str, name_b: str) -> bool:
        words_a = significant_words(name_a)
        words_b = significant_words(name_b)
        if not words_a or not words_b:
            return False

        # Overlap is measured on the smaller side; on a tie both sides are
        # tried so the answer does not depend on argument order.
        if len(words_a) < len(words_b):
            matched = _matched_count(words_a, words_b)
        elif len(words_b) < len(words_a):
            matched = _matched_count(words_b, words_a)
        else:
            matched = max(
                _matched_count(words_a, words_b),
                _matched_count(words_b, words_a),
            )

        overlap = matched / min(len(words_a), len(words_b))
        return overlap > self.config.word_overlap_threshold
