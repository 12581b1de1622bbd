"""Tests for the location matcher."""

from __future__ import annotations

import pytest

from itinerary_engine.config import MatchingConfig
from itinerary_engine.domain.models import GeoLocation, Location
from itinerary_engine.services.location_matcher import (
    LocationMatcher,
    haversine_distance,
    normalize_name,
    significant_words,
    words_similar,
)

FABRIC = GeoLocation(48.8566, 2.3522)
FABRIC_NEARBY = GeoLocation(48.8570, 2.3525)
LOUVRE_FAR = GeoLocation(48.8606, 2.3376)


@pytest.fixture
def matcher() -> LocationMatcher:
    return LocationMatcher(MatchingConfig())


def test_haversine_paris_london():
    paris = GeoLocation(48.8566, 2.3522)
    london = GeoLocation(51.5074, -0.1278)
    assert 340_000 < haversine_distance(paris, london) < 347_000


def test_haversine_same_point_is_zero():
    assert haversine_distance(FABRIC, FABRIC) == pytest.approx(0.0)


def test_normalize_name_strips_accents_punctuation_and_suffixes():
    assert normalize_name("Los Angeles International Airport") == "los angeles"
    assert normalize_name("Hôtel Plaza-Athénée") == "hotel plaza athenee"
    assert normalize_name("  ") == ""


def test_significant_words_drops_stop_words_and_short_words():
    assert significant_words("the four seasons resort at maui") == ["four", "seasons", "maui"]


def test_words_similar_tolerates_typos():
    assert words_similar("marriott", "mariott")
    assert words_similar("rome", "romeo")
    assert not words_similar("paris", "lyon")


class TestCodes:
    def test_equal_codes_match_case_insensitively(self, matcher):
        assert matcher.is_same_location(Location(code="lax"), Location(code="LAX"))

    def test_different_codes_are_decisive(self, matcher):
        a = Location(name="Paris", code="CDG")
        b = Location(name="Paris", code="ORY")
        assert not matcher.is_same_location(a, b)

    def test_long_codes_are_not_decisive(self, matcher):
        a = Location(name="Hotel Fabric", code="HFABRIC")
        b = Location(name="Hotel Fabric", code="XY")
        assert matcher.is_same_location(a, b)

    def test_one_sided_code_falls_through(self, matcher):
        a = Location(name="Heathrow Airport", code="LHR")
        b = Location(name="Heathrow")
        assert matcher.is_same_location(a, b)


class TestCoordinates:
    def test_close_coordinates_match_despite_names(self, matcher):
        a = Location(name="Hotel Fabric", coordinates=FABRIC)
        b = Location(name="Le Fabric Paris", coordinates=FABRIC_NEARBY)
        assert matcher.is_same_location(a, b)

    def test_far_coordinates_with_unrelated_names(self, matcher):
        a = Location(name="Hotel Fabric", coordinates=FABRIC)
        b = Location(name="Louvre Museum", coordinates=LOUVRE_FAR)
        assert not matcher.is_same_location(a, b)

    def test_threshold_comes_from_config(self):
        strict = LocationMatcher(MatchingConfig(coordinate_threshold_meters=10))
        a = Location(name="Entrance North", coordinates=FABRIC)
        b = Location(name="Gate South", coordinates=FABRIC_NEARBY)
        assert not strict.is_same_location(a, b)


class TestNames:
    def test_street_address_matches_other_name(self, b, matcher):
        a = b.place("Empire State Building", street="350 Fifth Avenue", city="New York")
        other = Location(name="350 Fifth Avenue")
        assert matcher.is_same_location(a, other)

    def test_airport_suffix_is_ignored(self, matcher):
        assert matcher.is_same_location(
            Location(name="Heathrow Airport"), Location(name="Heathrow")
        )

    def test_accents_are_ignored(self, matcher):
        assert matcher.is_same_location(
            Location(name="Hôtel Plaza Athénée"), Location(name="hotel plaza athenee")
        )

    def test_containment_of_long_names(self, matcher):
        assert matcher.is_same_location(
            Location(name="Ritz Carlton Half Moon Bay"),
            Location(name="The Ritz-Carlton, Half Moon Bay"),
        )

    def test_fuzzy_word_overlap(self, matcher):
        assert matcher.is_same_location(
            Location(name="Chateau Marmont"), Location(name="Chateu Marmont")
        )

    def test_same_city_is_not_same_place(self, b, matcher):
        a = b.place("Louvre Museum", city="Paris", country="FR")
        other = b.place("Eiffel Tower", city="Paris", country="FR")
        assert not matcher.is_same_location(a, other)

    def test_empty_locations_never_match(self, matcher):
        assert not matcher.is_same_location(Location(), Location())

    def test_names_of_only_generic_words_compare_raw(self, matcher):
        assert matcher.is_same_location(Location(name="Airport"), Location(name="Airport"))
        assert matcher.is_same_location(
            Location(name="International  Airport"), Location(name="international airport")
        )
        assert not matcher.is_same_location(Location(name="Airport"), Location(name="Hotel"))

    def test_generic_name_against_real_name(self, matcher):
        assert not matcher.is_same_location(Location(name="Hotel"), Location(name="Hotel Fabric"))


@pytest.mark.parametrize(
    "a, b",
    [
        (Location(name="Chateau Marmont"), Location(name="Chateu Marmont")),
        (Location(name="Hotel Fabric"), Location(name="Fabric")),
        (Location(name="Grand Hyatt Tokyo"), Location(name="Park Hyatt Tokyo")),
        (Location(name="JFK", code="JFK"), Location(name="Kennedy")),
        (Location(name="Spa"), Location(name="Spa Valley Gardens")),
    ],
)
def test_matching_is_symmetric(matcher, a, b):
    assert matcher.is_same_location(a, b) == matcher.is_same_location(b, a)
