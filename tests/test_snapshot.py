"""Tests for JSON snapshot persistence of the booking state."""

import json

import pytest

from bus_booking.adapters.snapshot import JsonSnapshotRepository
from bus_booking.domain.errors import StorageError
from bus_booking.domain.models import (
    AddPassengerToRoutePayload,
    BookingPayload,
    PassengerPayload,
    ProposalPayload,
    VotePayload,
)
from bus_booking.services import BookingService, BookingState


def test_load_missing_file_returns_none(tmp_path):
    repo = JsonSnapshotRepository(tmp_path / "state.json")
    assert repo.load() is None


def test_round_trip_preserves_records_and_counter(tmp_path, service, seeded, clock):
    _, route, passenger = seeded
    service.add_passenger_to_route(AddPassengerToRoutePayload(route.id, passenger.id))
    service.book_route(BookingPayload(route_id=route.id, passenger_id=passenger.id, amount=9.5))
    proposal = service.propose_route(
        ProposalPayload(route_id=route.id, proposer_id=passenger.id, description="Later bus")
    )
    service.vote_on_proposal(VotePayload(proposal.id, passenger.id, False))

    repo = JsonSnapshotRepository(tmp_path / "nested" / "state.json")
    repo.save(service.state)
    restored = repo.load()

    assert restored is not None
    assert restored.to_dict() == service.state.to_dict()
    assert restored.routes.get(route.id).passengers == (passenger.id,)
    assert restored.proposals.get(proposal.id).votes_against == 1

    # The counter continues where it stopped; no id is reused.
    resumed = BookingService(state=restored, clock=clock)
    newcomer = resumed.create_passenger(PassengerPayload(name="Ann", email="ann@example.com"))
    assert newcomer.id == service.state.ids.current + 1


def test_layout(tmp_path, service, seeded):
    path = tmp_path / "state.json"
    JsonSnapshotRepository(path).save(service.state)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["version"] == 1
    assert data["id_counter"] == 3
    assert [a["id"] for a in data["admins"]] == [1]
    assert data["routes"][0]["passengers"] == []
    assert data["bookings"] == []
    assert data["proposals"] == []


def test_save_leaves_no_temp_files(tmp_path, state):
    path = tmp_path / "state.json"
    repo = JsonSnapshotRepository(path)
    repo.save(state)
    repo.save(state)

    assert sorted(p.name for p in tmp_path.iterdir()) == ["state.json"]


def test_corrupt_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError) as exc:
        JsonSnapshotRepository(path).load()
    assert exc.value.file_path == str(path)
    assert exc.value.cause is not None


def test_non_object_root(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(StorageError):
        JsonSnapshotRepository(path).load()


def test_unknown_version(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"version": 99}), encoding="utf-8")

    with pytest.raises(StorageError, match="Unsupported snapshot version"):
        JsonSnapshotRepository(path).load()


def test_malformed_record(tmp_path):
    path = tmp_path / "state.json"
    data = BookingState.empty().to_dict()
    data["admins"] = [{"id": 1, "created_at": 0, "unexpected": "field"}]
    data["id_counter"] = 1
    path.write_text(json.dumps(data), encoding="utf-8")

    with pytest.raises(StorageError, match="Malformed snapshot record") as exc:
        JsonSnapshotRepository(path).load()
    assert exc.value.file_path == str(path)


def test_counter_behind_records_rejected(tmp_path, service, seeded):
    data = service.state.to_dict()
    data["id_counter"] = 1

    with pytest.raises(StorageError, match="behind"):
        BookingState.from_dict(data)
