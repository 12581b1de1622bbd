"""Tests for the consistency service and its in-memory adapters."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from itinerary_engine.adapters.geocoding import LookupGeocoderAdapter
from itinerary_engine.adapters.storage import InMemorySegmentRepository
from itinerary_engine.domain.errors import DependencyCycleError, SegmentNotFoundError
from itinerary_engine.domain.models import GapType, GeoLocation, Location
from itinerary_engine.services import ItineraryConsistencyService

FABRIC = GeoLocation(48.8566, 2.3522)
FABRIC_NEARBY = GeoLocation(48.8567, 2.3523)


@pytest.fixture
def repository(b) -> InMemorySegmentRepository:
    repo = InMemorySegmentRepository()
    repo.save_segments(
        "trip",
        [
            b.flight(
                "F1",
                b.at(0),
                5,
                origin=Location(code="JFK"),
                destination=b.place("LAX", code="LAX"),
            ),
            b.hotel("H1", b.at(6), location=b.place("Beverly Hills Hotel", city="Los Angeles"), depends_on=("F1",)),
            b.activity("A1", b.at(20), 2, name="Getty Center tour", location=b.place("Getty Center", city="Los Angeles")),
        ],
    )
    return repo


@pytest.fixture
def service(repository) -> ItineraryConsistencyService:
    return ItineraryConsistencyService(repository=repository)


class TestInMemoryRepository:
    def test_unknown_itinerary(self):
        with pytest.raises(KeyError):
            InMemorySegmentRepository().load_segments("missing")

    def test_updates_are_all_or_nothing(self, b, repository):
        with pytest.raises(SegmentNotFoundError):
            repository.apply_time_updates(
                "trip", {"H1": (b.at(1), b.at(2)), "ghost": (b.at(1), b.at(2))}
            )

        hotel = next(s for s in repository.load_segments("trip") if s.id == "H1")
        assert hotel.start == b.at(6)

    def test_updates_replace_times(self, b, repository):
        repository.apply_time_updates("trip", {"A1": (b.at(21), b.at(23))})

        activity = next(s for s in repository.load_segments("trip") if s.id == "A1")
        assert (activity.start, activity.end) == (b.at(21), b.at(23))


class TestFindGaps:
    def test_finds_airport_and_local_gaps(self, service):
        gaps = service.find_gaps("trip")

        assert [(g.before_id, g.after_id) for g in gaps] == [("F1", "H1"), ("H1", "A1")]
        assert all(g.gap_type == GapType.LOCAL_TRANSFER for g in gaps)

    def test_validate_summarizes(self, service):
        report = service.validate("trip")
        assert not report.valid
        assert report.segment_count == 3

    def test_propose_fills_one_per_gap(self, service):
        proposals = service.propose_fills("trip")
        assert len(proposals) == 2
        assert all(p.inferred for p in proposals)

    def test_geocoder_enrichment_closes_gap(self, b):
        repo = InMemorySegmentRepository()
        repo.save_segments(
            "paris",
            [
                b.hotel("H1", b.at(0), location=Location(name="Hotel Fabric")),
                b.activity("A1", b.at(14), name="Drinks", location=Location(name="Rooftop Bar Paris")),
            ],
        )
        geocoder = LookupGeocoderAdapter(
            {"Hotel Fabric": FABRIC, "Rooftop Bar Paris": FABRIC_NEARBY}
        )

        plain = ItineraryConsistencyService(repository=repo).find_gaps("paris")
        enriched = ItineraryConsistencyService(repository=repo, geocoder=geocoder).find_gaps("paris")

        assert [g.after_id for g in plain] == ["A1"]
        assert enriched == []

    def test_geocoder_is_not_called_for_located_places(self, b):
        repo = InMemorySegmentRepository()
        located = Location(name="Hotel Fabric", coordinates=FABRIC)
        repo.save_segments("x", [b.hotel("H1", b.at(0), location=located)])
        geocoder = MagicMock()

        ItineraryConsistencyService(repository=repo, geocoder=geocoder).find_gaps("x")

        geocoder.geocode.assert_not_called()

    def test_geocoder_miss_keeps_location(self, b):
        repo = InMemorySegmentRepository()
        repo.save_segments("x", [b.hotel("H1", b.at(0), location=Location(name="Nowhere Inn"))])
        geocoder = MagicMock()
        geocoder.geocode.return_value = None

        assert ItineraryConsistencyService(repository=repo, geocoder=geocoder).find_gaps("x") == []
        geocoder.geocode.assert_called_once()


class TestMoveSegment:
    def test_move_persists_cascade(self, b, service, repository):
        result = service.move_segment("trip", "F1", b.at(2))

        assert result.is_success
        assert result.dependents_adjusted == 1
        stored = {s.id: s for s in repository.load_segments("trip")}
        assert stored["F1"].start == b.at(2)
        assert stored["H1"].start == b.at(8)
        assert stored["A1"].start == b.at(20)

    def test_updates_go_through_one_repository_call(self, b, repository):
        spy = MagicMock(wraps=repository)
        service = ItineraryConsistencyService(repository=spy)

        service.move_segment("trip", "F1", b.at(1))

        spy.apply_time_updates.assert_called_once()
        _, updates = spy.apply_time_updates.call_args.args
        assert set(updates) == {"F1", "H1"}
        assert updates["H1"] == (b.at(7), b.at(19))

    def test_refused_move_writes_nothing(self, b, repository):
        spy = MagicMock(wraps=repository)
        service = ItineraryConsistencyService(repository=spy)

        result = service.move_segment("trip", "ghost", b.at(1))

        assert isinstance(result.error, SegmentNotFoundError)
        spy.apply_time_updates.assert_not_called()

    def test_cycle_is_returned(self, b):
        repo = InMemorySegmentRepository()
        repo.save_segments(
            "loop",
            [
                b.activity("A", b.at(0), 1, depends_on=("B",)),
                b.activity("B", b.at(2), 1, depends_on=("A",)),
            ],
        )

        result = ItineraryConsistencyService(repository=repo).move_segment("loop", "A", b.at(1))

        assert isinstance(result.error, DependencyCycleError)
        assert repo.load_segments("loop")[0].start == b.at(0)

    def test_move_to_same_time_is_a_no_op(self, b, service, repository):
        result = service.move_segment("trip", "F1", b.at(0))

        assert result.changed_ids == ()
        assert result.delta == timedelta(0)
