"""Booking service - the domain operations.

Each operation is a single-shot transaction with the same shape:
validate inputs, check referenced entities exist, check uniqueness, mint
an id (creations only), build the record, write it. Checks run in order
and stop at the first failure; nothing is written until every check has
passed, so a rejected request leaves the state untouched and consumes no
identifier.

Operations run one at a time under the service lock, which makes each
read-then-write sequence atomic with respect to other callers.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from ..adapters.clock import SystemClock
from ..domain.errors import (
    AlreadyExistsError,
    BookingError,
    EmptyFieldsError,
    NotFoundError,
)
from ..domain.models import (
    AddPassengerToRoutePayload,
    Admin,
    AdminPayload,
    Booking,
    BookingPayload,
    Entity,
    Passenger,
    PassengerPayload,
    Proposal,
    ProposalPayload,
    Route,
    RoutePayload,
    VotePayload,
)
from ..domain.validation import parse_admin_id, validate_email, validate_name
from ..ports.clock import ClockPort
from ..ports.store import EntityStorePort
from .state import BookingState

R = TypeVar("R")


@dataclass
class BookingService:
    """Entry point for every mutating booking operation.

    Attributes:
        state: The collections and id counter the operations act on
        clock: Source of ``created_at`` timestamps
        on_commit: Optional hook called after every successful mutation
            (used for snapshot autosave). If it raises, the mutation is
            rolled back and the error propagates.
    """

    state: BookingState = field(default_factory=BookingState.empty)
    clock: ClockPort = field(default_factory=SystemClock)
    on_commit: Optional[Callable[[BookingState], None]] = None

    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _undo: List[Tuple[EntityStorePort[Any], int, Optional[Entity]]] = field(
        default_factory=list, repr=False
    )
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Creations
    # ------------------------------------------------------------------

    def create_admin(self, payload: AdminPayload) -> Admin:
        """Register a route administrator.

        Raises:
            EmptyFieldsError: If name or email is empty.
            InvalidEmailError: If the email is malformed.
            AlreadyExistsError: If another admin uses the email.
            InvalidNameError: If the name is malformed.
        """

        def run() -> Admin:
            self._require_name_and_email(payload.name, payload.email)
            validate_email(payload.email)
            self._require_unique_email(self.state.admins, payload.email)
            validate_name(payload.name)

            admin = Admin(
                id=self.state.ids.next_id(),
                created_at=self.clock.now_ns(),
                name=payload.name,
                email=payload.email,
            )
            self._write(self.state.admins, admin)
            self._logger.info("Admin created", extra={"admin_id": admin.id})
            return admin

        return self._transaction("create_admin", run)

    def create_route(self, payload: RoutePayload) -> Route:
        """Create a route owned by an existing admin.

        Raises:
            InvalidNameError: If the route name is malformed.
            InvalidAdminIdError: If the admin id is not a u64 in int or text form.
            NotFoundError: If the admin does not exist.
        """

        def run() -> Route:
            validate_name(payload.name, "Invalid route name")
            admin_id = parse_admin_id(payload.admin_id)
            if not self.state.admins.contains(admin_id):
                raise NotFoundError("Admin not found", entity="admin", entity_id=admin_id)

            route = Route(
                id=self.state.ids.next_id(),
                created_at=self.clock.now_ns(),
                name=payload.name,
                admin_id=admin_id,
                passengers=(),
            )
            self._write(self.state.routes, route)
            self._logger.info(
                "Route created",
                extra={"route_id": route.id, "admin_id": route.admin_id},
            )
            return route

        return self._transaction("create_route", run)

    def create_passenger(self, payload: PassengerPayload) -> Passenger:
        """Register a passenger with zero points.

        Raises:
            EmptyFieldsError: If name or email is empty.
            InvalidEmailError: If the email is malformed.
            AlreadyExistsError: If another passenger uses the email.
            InvalidNameError: If the name is malformed.
        """

        def run() -> Passenger:
            self._require_name_and_email(payload.name, payload.email)
            validate_email(payload.email)
            self._require_unique_email(self.state.passengers, payload.email)
            validate_name(payload.name)

            passenger = Passenger(
                id=self.state.ids.next_id(),
                created_at=self.clock.now_ns(),
                name=payload.name,
                email=payload.email,
                points=0,
            )
            self._write(self.state.passengers, passenger)
            self._logger.info("Passenger created", extra={"passenger_id": passenger.id})
            return passenger

        return self._transaction("create_passenger", run)

    def book_route(self, payload: BookingPayload) -> Booking:
        """Book a route for a passenger.

        A passenger may book the same route any number of times.

        Raises:
            NotFoundError: If the route or the passenger does not exist.
        """

        def run() -> Booking:
            self._require_route(payload.route_id)
            self._require_passenger(payload.passenger_id)

            booking = Booking(
                id=self.state.ids.next_id(),
                created_at=self.clock.now_ns(),
                route_id=payload.route_id,
                passenger_id=payload.passenger_id,
                amount=payload.amount,
            )
            self._write(self.state.bookings, booking)
            self._logger.info(
                "Route booked",
                extra={
                    "booking_id": booking.id,
                    "route_id": booking.route_id,
                    "passenger_id": booking.passenger_id,
                },
            )
            return booking

        return self._transaction("book_route", run)

    def propose_route(self, payload: ProposalPayload) -> Proposal:
        """Open a proposal about a route with an empty vote tally.

        Raises:
            NotFoundError: If the route or the proposer does not exist.
        """

        def run() -> Proposal:
            self._require_route(payload.route_id)
            self._require_passenger(
                payload.proposer_id, message="Proposer not found", entity="proposer"
            )

            proposal = Proposal(
                id=self.state.ids.next_id(),
                created_at=self.clock.now_ns(),
                route_id=payload.route_id,
                proposer_id=payload.proposer_id,
                description=payload.description,
                votes_for=0,
                votes_against=0,
            )
            self._write(self.state.proposals, proposal)
            self._logger.info(
                "Proposal created",
                extra={"proposal_id": proposal.id, "route_id": proposal.route_id},
            )
            return proposal

        return self._transaction("propose_route", run)

    # ------------------------------------------------------------------
    # Read-modify-write
    # ------------------------------------------------------------------

    def vote_on_proposal(self, payload: VotePayload) -> Proposal:
        """Count one vote for or against a proposal.

        Any registered passenger may vote, any number of times.

        Returns:
            The proposal with its updated tally.

        Raises:
            NotFoundError: If the proposal or the passenger does not exist.
        """

        def run() -> Proposal:
            proposal = self.state.proposals.get(payload.proposal_id)
            if proposal is None:
                raise NotFoundError(
                    "Proposal not found",
                    entity="proposal",
                    entity_id=payload.proposal_id,
                )
            self._require_passenger(payload.passenger_id)

            if payload.vote:
                updated = replace(proposal, votes_for=proposal.votes_for + 1)
            else:
                updated = replace(proposal, votes_against=proposal.votes_against + 1)
            self._write(self.state.proposals, updated)
            self._logger.info(
                "Vote recorded",
                extra={
                    "proposal_id": updated.id,
                    "passenger_id": payload.passenger_id,
                    "vote": payload.vote,
                    "votes_for": updated.votes_for,
                    "votes_against": updated.votes_against,
                },
            )
            return updated

        return self._transaction("vote_on_proposal", run)

    def add_passenger_to_route(self, payload: AddPassengerToRoutePayload) -> Route:
        """Append a passenger to a route's passenger list.

        Returns:
            The route with its updated passenger list.

        Raises:
            NotFoundError: If the route or the passenger does not exist.
            AlreadyExistsError: If the passenger is already on the route.
        """

        def run() -> Route:
            route = self._require_route(payload.route_id)
            self._require_passenger(payload.passenger_id)
            if route.has_passenger(payload.passenger_id):
                raise AlreadyExistsError(
                    "Passenger is already on this route",
                    field_name="passengers",
                    value=str(payload.passenger_id),
                )

            updated = route.with_passenger(payload.passenger_id)
            self._write(self.state.routes, updated)
            self._logger.info(
                "Passenger added to route",
                extra={
                    "route_id": updated.id,
                    "passenger_id": payload.passenger_id,
                    "passenger_count": len(updated.passengers),
                },
            )
            return updated

        return self._transaction("add_passenger_to_route", run)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_admin(self, admin_id: int) -> Admin:
        return self._get_or_raise(self.state.admins, admin_id, "admin")

    def get_route(self, route_id: int) -> Route:
        return self._get_or_raise(self.state.routes, route_id, "route")

    def get_passenger(self, passenger_id: int) -> Passenger:
        return self._get_or_raise(self.state.passengers, passenger_id, "passenger")

    def get_booking(self, booking_id: int) -> Booking:
        return self._get_or_raise(self.state.bookings, booking_id, "booking")

    def get_proposal(self, proposal_id: int) -> Proposal:
        return self._get_or_raise(self.state.proposals, proposal_id, "proposal")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _transaction(self, operation: str, run: Callable[[], R]) -> R:
        """Run one operation under the service lock and log its outcome.

        If ``on_commit`` raises, every write made by the operation is
        undone and the id counter is rewound before the error propagates.
        """
        with self._lock:
            last_id = self.state.ids.current
            self._undo = []
            try:
                result = run()
            except BookingError as e:
                self._logger.info(
                    "Operation rejected",
                    extra={"operation": operation, "kind": e.kind, "reason": e.message},
                )
                raise

            if self.on_commit is not None:
                try:
                    self.on_commit(self.state)
                except Exception:
                    self._rollback(last_id)
                    self._logger.error(
                        "Commit hook failed, operation rolled back",
                        extra={"operation": operation},
                        exc_info=True,
                    )
                    raise
            self._undo = []
            return result

    def _write(self, store: EntityStorePort[Entity], record: Entity) -> None:
        previous = store.insert(record.id, record)
        self._undo.append((store, record.id, previous))

    def _rollback(self, last_id: int) -> None:
        for store, entity_id, previous in reversed(self._undo):
            if previous is None:
                store.remove(entity_id)
            else:
                store.insert(entity_id, previous)
        self._undo = []
        self.state.ids.rewind(last_id)

    @staticmethod
    def _require_name_and_email(name: str, email: str) -> None:
        empty = tuple(
            field_name
            for field_name, value in (("name", name), ("email", email))
            if not value
        )
        if empty:
            raise EmptyFieldsError("Name and email are required", fields=empty)

    @staticmethod
    def _require_unique_email(store: EntityStorePort, email: str) -> None:
        # Linear scan: collections have no secondary index.
        if any(record.email == email for _, record in store.scan()):
            raise AlreadyExistsError(
                "Email address already in use", field_name="email", value=email
            )

    def _require_route(self, route_id: int) -> Route:
        route = self.state.routes.get(route_id)
        if route is None:
            raise NotFoundError("Route not found", entity="route", entity_id=route_id)
        return route

    def _require_passenger(
        self,
        passenger_id: int,
        message: str = "Passenger not found",
        entity: str = "passenger",
    ) -> None:
        if not self.state.passengers.contains(passenger_id):
            raise NotFoundError(message, entity=entity, entity_id=passenger_id)

    @staticmethod
    def _get_or_raise(store: EntityStorePort[R], entity_id: int, entity: str) -> R:
        record = store.get(entity_id)
        if record is None:
            raise NotFoundError(
                f"{entity.capitalize()} not found", entity=entity, entity_id=entity_id
            )
        return record
