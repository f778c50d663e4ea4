"""Booking state - the five entity collections plus the id counter.

The state is an explicit object handed to the booking service rather than
module-level globals, so every test and every process builds its own
isolated instance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from ..adapters.store import InMemoryEntityStore, SequentialIdGenerator
from ..domain.errors import StorageError
from ..domain.models import (
    ENTITY_TYPES,
    Admin,
    Booking,
    EntityKind,
    Passenger,
    Proposal,
    Route,
)

SNAPSHOT_VERSION = 1


@dataclass
class BookingState:
    """All persisted booking data.

    Attributes:
        admins: Admin records keyed by id
        routes: Route records keyed by id
        passengers: Passenger records keyed by id
        bookings: Booking records keyed by id
        proposals: Proposal records keyed by id
        ids: Identifier counter shared by all collections
    """

    admins: InMemoryEntityStore[Admin] = field(
        default_factory=lambda: InMemoryEntityStore(name=EntityKind.ADMIN.value)
    )
    routes: InMemoryEntityStore[Route] = field(
        default_factory=lambda: InMemoryEntityStore(name=EntityKind.ROUTE.value)
    )
    passengers: InMemoryEntityStore[Passenger] = field(
        default_factory=lambda: InMemoryEntityStore(name=EntityKind.PASSENGER.value)
    )
    bookings: InMemoryEntityStore[Booking] = field(
        default_factory=lambda: InMemoryEntityStore(name=EntityKind.BOOKING.value)
    )
    proposals: InMemoryEntityStore[Proposal] = field(
        default_factory=lambda: InMemoryEntityStore(name=EntityKind.PROPOSAL.value)
    )
    ids: SequentialIdGenerator = field(default_factory=SequentialIdGenerator)

    @classmethod
    def empty(cls) -> BookingState:
        """Create a fresh state with no records and an unused counter."""
        return cls()

    def store_for(self, kind: EntityKind) -> InMemoryEntityStore[Any]:
        """Return the collection holding records of ``kind``."""
        return getattr(self, kind.value)

    def counts(self) -> Dict[str, int]:
        """Return the number of records per collection."""
        return {kind.value: self.store_for(kind).size() for kind in EntityKind}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the state into the persisted layout.

        Layout:
            {"version": 1, "id_counter": n, "admins": [...], "routes": [...],
             "passengers": [...], "bookings": [...], "proposals": [...]}
        """
        data: Dict[str, Any] = {
            "version": SNAPSHOT_VERSION,
            "id_counter": self.ids.current,
        }
        for kind in EntityKind:
            data[kind.value] = [record.to_dict() for record in self.store_for(kind).values()]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BookingState:
        """Restore a state from the output of ``to_dict``.

        Raises:
            StorageError: If the layout is not recognized or a record is
                malformed.
        """
        version = data.get("version")
        if version != SNAPSHOT_VERSION:
            raise StorageError(f"Unsupported snapshot version: {version!r}")

        try:
            counter = int(data.get("id_counter", 0))
            state = cls(ids=SequentialIdGenerator(start=counter))
            highest = 0
            for kind in EntityKind:
                entity_type = ENTITY_TYPES[kind]
                store = state.store_for(kind)
                for raw in data.get(kind.value, []):
                    record = entity_type.from_dict(raw)
                    store.insert(record.id, record)
                    highest = max(highest, record.id)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Malformed snapshot record: {e}", cause=e)

        if highest > counter:
            raise StorageError(
                f"Snapshot counter {counter} is behind stored id {highest}"
            )
        return state
