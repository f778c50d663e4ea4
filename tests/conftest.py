"""Shared fixtures: isolated booking state and a deterministic clock."""

from __future__ import annotations

import logging

import pytest

from bus_booking.adapters.clock import FixedClock
from bus_booking.config import reset_config
from bus_booking.domain.models import AdminPayload, PassengerPayload, RoutePayload
from bus_booking.services import BookingService, BookingState


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    """Keep BUS_* variables from the host environment out of the tests."""
    import os

    for name in list(os.environ):
        if name.startswith("BUS_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handlers and level set by configure_logging."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def clock():
    return FixedClock(start_ns=1_700_000_000_000_000_000, step_ns=1_000)


@pytest.fixture
def state():
    return BookingState.empty()


@pytest.fixture
def service(state, clock):
    return BookingService(state=state, clock=clock)


@pytest.fixture
def seeded(service):
    """Admin (id 1), route (id 2) and passenger (id 3), as in the walkthrough."""
    admin = service.create_admin(AdminPayload(name="Jane Doe", email="jane@example.com"))
    route = service.create_route(RoutePayload(name="Route A", admin_id=admin.id))
    passenger = service.create_passenger(
        PassengerPayload(name="John Smith", email="john@example.com")
    )
    return admin, route, passenger
