"""Shared fixtures and segment builders."""

from __future__ import annotations

import os
from datetime import datetime, timedelta

import pytest

from itinerary_engine.config import reset_config
from itinerary_engine.domain.models import (
    ActivitySegment,
    Address,
    FlightSegment,
    HotelSegment,
    Location,
    MeetingSegment,
    TransferSegment,
)

T0 = datetime(2025, 3, 1, 8, 0)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Every test starts from default configuration."""
    for name in list(os.environ):
        if name.startswith("ITE_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def t0() -> datetime:
    return T0


def at(hours: float) -> datetime:
    return T0 + timedelta(hours=hours)


def place(name="", code=None, city=None, country=None, street=None, coordinates=None):
    address = None
    if city or country or street:
        address = Address(street=street, city=city, country=country)
    return Location(name=name, code=code, address=address, coordinates=coordinates)


def flight(id, start, hours=2.0, origin=None, destination=None, **kw):
    return FlightSegment(
        id=id,
        start=start,
        end=start + timedelta(hours=hours),
        origin=origin,
        destination=destination,
        **kw,
    )


def hotel(id, start, hours=12.0, location=None, **kw):
    return HotelSegment(
        id=id, start=start, end=start + timedelta(hours=hours), location=location, **kw
    )


def activity(id, start, hours=0.0, location=None, name="", **kw):
    return ActivitySegment(
        id=id,
        start=start,
        end=start + timedelta(hours=hours),
        location=location,
        name=name,
        **kw,
    )


def transfer(id, start, hours=1.0, pickup=None, dropoff=None, **kw):
    return TransferSegment(
        id=id,
        start=start,
        end=start + timedelta(hours=hours),
        pickup=pickup,
        dropoff=dropoff,
        **kw,
    )


def meeting(id, start, hours=0.0, location=None, title="", **kw):
    return MeetingSegment(
        id=id,
        start=start,
        end=start + timedelta(hours=hours),
        location=location,
        title=title,
        **kw,
    )


class Builders:
    """Namespace handed to tests through the ``b`` fixture."""

    at = staticmethod(at)
    place = staticmethod(place)
    flight = staticmethod(flight)
    hotel = staticmethod(hotel)
    activity = staticmethod(activity)
    transfer = staticmethod(transfer)
    meeting = staticmethod(meeting)


@pytest.fixture
def b() -> type[Builders]:
    return Builders
