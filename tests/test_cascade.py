"""Tests for the cascade adjuster."""

from __future__ import annotations

from datetime import timedelta

import pytest

from itinerary_engine import adjust_dependent_segments, move_segment
from itinerary_engine.config import CascadeConfig
from itinerary_engine.domain.errors import (
    DependencyCycleError,
    DependencyError,
    InvalidSegmentError,
    SegmentNotFoundError,
)
from itinerary_engine.domain.models import CascadeMode, Dependency
from itinerary_engine.services.cascade import CascadeAdjuster


@pytest.fixture
def adjuster() -> CascadeAdjuster:
    return CascadeAdjuster(CascadeConfig())


@pytest.fixture
def trip(b):
    """Flight, hotel depending on it, and an unrelated activity."""
    return [
        b.flight("F1", b.at(0), 5),
        b.hotel("H1", b.at(6), depends_on=("F1",)),
        b.activity("A1", b.at(20), 2, name="Museum"),
    ]


@pytest.fixture
def cyclic(b):
    return [
        b.activity("A", b.at(0), 1, depends_on=("C",)),
        b.activity("B", b.at(2), 1, depends_on=("A",)),
        b.activity("C", b.at(4), 1, depends_on=("B",)),
    ]


class TestAdjust:
    def test_moving_flight_shifts_dependent_hotel_only(self, b, adjuster, trip):
        result = adjuster.adjust(trip, "F1", timedelta(hours=2))

        by_id = {s.id: s for s in result.segments}
        assert by_id["F1"].start == b.at(2)
        assert by_id["H1"].start == b.at(8)
        assert by_id["A1"] is trip[2]
        assert result.changed_ids == ("F1", "H1")
        assert result.dependents_adjusted == 1
        assert result.is_success

    def test_segment_count_and_order_are_preserved(self, adjuster, trip):
        result = adjuster.adjust(trip, "F1", timedelta(hours=2))
        assert [s.id for s in result.segments] == ["F1", "H1", "A1"]

    def test_durations_are_preserved(self, adjuster, trip):
        result = adjuster.adjust(trip, "F1", timedelta(minutes=-45))
        for before, after in zip(trip, result.segments):
            assert after.duration == before.duration

    def test_integer_delta_is_milliseconds(self, b, adjuster, trip):
        result = adjuster.adjust(trip, "F1", 3_600_000)

        assert result.delta == timedelta(hours=1)
        assert result.segments[0].start == b.at(1)

    def test_zero_delta_changes_nothing(self, adjuster, trip):
        result = adjuster.adjust(trip, "F1", 0)

        assert result.changed_ids == ()
        assert all(a is b for a, b in zip(result.segments, trip))

    def test_moving_a_leaf_shifts_only_itself(self, adjuster, trip):
        result = adjuster.adjust(trip, "H1", timedelta(hours=1))
        assert result.changed_ids == ("H1",)

    def test_caller_dependencies_extend_the_graph(self, adjuster, trip):
        result = adjuster.adjust(
            trip, "F1", timedelta(hours=1), dependencies=[Dependency("H1", "A1")]
        )
        assert result.changed_ids == ("F1", "H1", "A1")

    def test_auto_mode_follows_chronology_of_free_segments(self, b, adjuster):
        segments = [b.activity(i, b.at(n * 3), 2) for n, i in enumerate("xyz")]

        result = adjuster.adjust(segments, "x", timedelta(hours=1))

        assert result.changed_ids == ("x", "y", "z")

    def test_dependencies_only_mode_ignores_chronology(self, b, adjuster):
        segments = [b.activity(i, b.at(n * 3), 2) for n, i in enumerate("xyz")]

        result = adjuster.adjust(
            segments, "x", timedelta(hours=1), mode=CascadeMode.DEPENDENCIES_ONLY
        )

        assert result.changed_ids == ("x",)

    def test_default_mode_comes_from_config(self, b):
        adjuster = CascadeAdjuster(CascadeConfig(default_mode="dependencies-only"))
        segments = [b.activity(i, b.at(n * 3), 2) for n, i in enumerate("xyz")]

        result = adjuster.adjust(segments, "x", timedelta(hours=1))

        assert result.changed_ids == ("x",)

    def test_unknown_segment(self, adjuster, trip):
        with pytest.raises(SegmentNotFoundError) as exc_info:
            adjuster.adjust(trip, "nope", timedelta(hours=1))
        assert exc_info.value.segment_id == "nope"

    @pytest.mark.parametrize("moved", ["A", "B", "C"])
    def test_cycle_is_reported_for_any_member(self, adjuster, cyclic, moved):
        with pytest.raises(DependencyCycleError) as exc_info:
            adjuster.adjust(cyclic, moved, timedelta(hours=1))

        cycle = exc_info.value.cycle
        assert cycle[0] == cycle[-1]
        assert set(cycle) == {"A", "B", "C"}

    def test_cycle_elsewhere_still_blocks(self, b, adjuster, cyclic):
        segments = cyclic + [b.activity("Z", b.at(10), 1)]
        with pytest.raises(DependencyCycleError):
            adjuster.adjust(segments, "Z", timedelta(hours=1))

    def test_duplicate_ids_are_rejected(self, b, adjuster):
        segments = [b.activity("x", b.at(0)), b.activity("x", b.at(1))]
        with pytest.raises(InvalidSegmentError):
            adjuster.adjust(segments, "x", timedelta(hours=1))

    def test_segment_ending_before_start_is_rejected(self, b):
        with pytest.raises(InvalidSegmentError):
            b.activity("x", b.at(2), hours=-1)

    def test_input_is_not_mutated(self, b, adjuster, trip):
        snapshot = list(trip)
        adjuster.adjust(trip, "F1", timedelta(hours=2))
        assert trip == snapshot
        assert trip[0].start == b.at(0)


class TestAdjustSafe:
    def test_cycle_is_returned_not_raised(self, adjuster, cyclic):
        result = adjuster.adjust_safe(cyclic, "A", timedelta(hours=1))

        assert not result.is_success
        assert isinstance(result.error, DependencyCycleError)
        assert result.segments == ()
        assert result.changed_segments == ()

    def test_unknown_segment_is_returned(self, adjuster, trip):
        result = adjuster.adjust_safe(trip, "nope", 1000)
        assert isinstance(result.error, SegmentNotFoundError)
        assert isinstance(result.error, DependencyError)


class TestMove:
    def test_move_computes_delta_from_current_start(self, b, adjuster, trip):
        result = adjuster.move(trip, "F1", b.at(3))

        assert result.delta == timedelta(hours=3)
        assert [s.id for s in result.changed_segments] == ["F1", "H1"]

    def test_move_unknown_segment(self, b, adjuster, trip):
        with pytest.raises(SegmentNotFoundError):
            adjuster.move(trip, "nope", b.at(3))


class TestEngineFunctions:
    def test_adjust_dependent_segments_never_raises_for_cycles(self, cyclic):
        result = adjust_dependent_segments(cyclic, "B", timedelta(hours=1))
        assert isinstance(result.error, DependencyCycleError)

    def test_adjust_dependent_segments_success(self, b, trip):
        result = adjust_dependent_segments(trip, "F1", timedelta(hours=2))
        assert result.is_success
        assert result.changed_ids == ("F1", "H1")

    def test_move_segment_unknown(self, b, trip):
        result = move_segment(trip, "nope", b.at(1))
        assert isinstance(result.error, SegmentNotFoundError)

    def test_move_segment_respects_env_default_mode(self, b, monkeypatch):
        from itinerary_engine.config import reset_config

        monkeypatch.setenv("ITE_CASCADE_DEFAULT_MODE", "dependencies-only")
        reset_config()
        segments = [b.activity(i, b.at(n * 3), 2) for n, i in enumerate("xyz")]

        result = move_segment(segments, "x", b.at(1))

        assert result.changed_ids == ("x",)
