"""Immutable domain models for the bus booking core.

Entity records are frozen dataclasses with slots. A mutation never edits a
stored record in place: the service builds a new record with
``dataclasses.replace`` and upserts it under the same id.

Payload classes carry the already-decoded input of each domain operation.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Dict, Mapping, Tuple, Type, TypeVar, Union

E = TypeVar("E", bound="Entity")

U64_MAX = 2**64 - 1


class EntityKind(Enum):
    """Entity collections, in the order they are persisted."""

    ADMIN = "admins"
    ROUTE = "routes"
    PASSENGER = "passengers"
    BOOKING = "bookings"
    PROPOSAL = "proposals"


@dataclass(frozen=True, slots=True)
class Entity:
    """Fields shared by every stored record.

    Attributes:
        id: Identifier from the shared monotonic counter
        created_at: Creation time in nanoseconds since the Unix epoch
    """

    id: int
    created_at: int

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-compatible representation of the record."""
        return asdict(self)

    @classmethod
    def from_dict(cls: Type[E], data: Mapping[str, Any]) -> E:
        """Rebuild a record from the output of ``to_dict``."""
        return cls(**dict(data))


@dataclass(frozen=True, slots=True)
class Admin(Entity):
    """A route administrator."""

    name: str = ""
    email: str = ""


@dataclass(frozen=True, slots=True)
class Route(Entity):
    """A bus route and the passengers registered on it.

    Attributes:
        name: Route display name
        admin_id: Id of the admin that created the route
        passengers: Passenger ids in the order they were added, no repeats
    """

    name: str = ""
    admin_id: int = 0
    passengers: Tuple[int, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["passengers"] = list(self.passengers)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Route:
        values = dict(data)
        values["passengers"] = tuple(values.get("passengers", ()))
        return cls(**values)

    def has_passenger(self, passenger_id: int) -> bool:
        """Check whether the passenger is already on the route."""
        return passenger_id in self.passengers

    def with_passenger(self, passenger_id: int) -> Route:
        """Return a copy of the route with the passenger appended."""
        return replace(self, passengers=self.passengers + (passenger_id,))


@dataclass(frozen=True, slots=True)
class Passenger(Entity):
    """A registered passenger.

    Attributes:
        name: Passenger full name
        email: Contact email, unique among passengers
        points: Loyalty points, starts at 0
    """

    name: str = ""
    email: str = ""
    points: int = 0


@dataclass(frozen=True, slots=True)
class Booking(Entity):
    """A passenger booking on a route. ``amount`` is recorded, never charged."""

    route_id: int = 0
    passenger_id: int = 0
    amount: float = 0.0


@dataclass(frozen=True, slots=True)
class Proposal(Entity):
    """A passenger proposal about a route, with its vote tally."""

    route_id: int = 0
    proposer_id: int = 0
    description: str = ""
    votes_for: int = 0
    votes_against: int = 0

    @property
    def total_votes(self) -> int:
        """Return the number of votes cast either way."""
        return self.votes_for + self.votes_against


AnyEntity = Union[Admin, Route, Passenger, Booking, Proposal]

ENTITY_TYPES: Dict[EntityKind, Type[Entity]] = {
    EntityKind.ADMIN: Admin,
    EntityKind.ROUTE: Route,
    EntityKind.PASSENGER: Passenger,
    EntityKind.BOOKING: Booking,
    EntityKind.PROPOSAL: Proposal,
}


# Operation payloads


@dataclass(frozen=True, slots=True)
class AdminPayload:
    name: str
    email: str


@dataclass(frozen=True, slots=True)
class RoutePayload:
    """Route input. ``admin_id`` may still be the undecoded text form."""

    name: str
    admin_id: Union[int, str]


@dataclass(frozen=True, slots=True)
class PassengerPayload:
    name: str
    email: str


@dataclass(frozen=True, slots=True)
class BookingPayload:
    route_id: int
    passenger_id: int
    amount: float


@dataclass(frozen=True, slots=True)
class ProposalPayload:
    route_id: int
    proposer_id: int
    description: str


@dataclass(frozen=True, slots=True)
class VotePayload:
    """Vote on a proposal. ``vote`` is True for, False against."""

    proposal_id: int
    passenger_id: int
    vote: bool


@dataclass(frozen=True, slots=True)
class AddPassengerToRoutePayload:
    route_id: int
    passenger_id: int
