"""Operation dispatcher. Calls the booking service only. No business logic.

A transport hands ``call`` an operation name and a decoded JSON payload
and gets back a tagged result:

    {"Ok": {...record...}}                 creations
    {"Ok": None}                           vote_on_proposal, add_passenger_to_route
    {"Err": {"NotFound": {"msg": "..."}}}  any taxonomy error
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type

from pydantic import ValidationError

from ..domain.errors import BookingError, PayloadError, UnknownOperationError
from ..domain.models import Entity
from ..services.booking_service import BookingService
from .schemas import (
    AddPassengerToRoutePayloadSchema,
    AdminPayloadSchema,
    BookingPayloadSchema,
    PassengerPayloadSchema,
    PayloadSchema,
    ProposalPayloadSchema,
    RoutePayloadSchema,
    VotePayloadSchema,
)

TaggedResult = Dict[str, Any]


@dataclass(frozen=True)
class Operation:
    """One remotely callable operation.

    Attributes:
        schema: Payload schema for decoding the request
        handler: Selects the service method to call
        returns_record: Whether the Ok value carries the record or None
    """

    schema: Type[PayloadSchema]
    handler: Callable[[BookingService], Callable[[Any], Entity]]
    returns_record: bool = True


OPERATIONS: Dict[str, Operation] = {
    "create_admin": Operation(AdminPayloadSchema, lambda s: s.create_admin),
    "create_route": Operation(RoutePayloadSchema, lambda s: s.create_route),
    "create_passenger": Operation(PassengerPayloadSchema, lambda s: s.create_passenger),
    "book_route": Operation(BookingPayloadSchema, lambda s: s.book_route),
    "propose_route": Operation(ProposalPayloadSchema, lambda s: s.propose_route),
    "vote_on_proposal": Operation(
        VotePayloadSchema, lambda s: s.vote_on_proposal, returns_record=False
    ),
    "add_passenger_to_route": Operation(
        AddPassengerToRoutePayloadSchema,
        lambda s: s.add_passenger_to_route,
        returns_record=False,
    ),
}


def ok(record: Optional[Entity]) -> TaggedResult:
    return {"Ok": record.to_dict() if record is not None else None}


def err(error: BookingError) -> TaggedResult:
    return {"Err": {error.kind: {"msg": error.message}}}


@dataclass
class BookingDispatcher:
    """Routes named operation calls to the booking service.

    Attributes:
        service: The booking service executing the operations
    """

    service: BookingService

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @staticmethod
    def operations() -> Tuple[str, ...]:
        """Return the names of all callable operations."""
        return tuple(OPERATIONS)

    def call(self, operation: str, payload: Mapping[str, Any]) -> TaggedResult:
        """Decode the payload, run the operation and tag the outcome.

        Args:
            operation: Operation name (see ``operations()``).
            payload: Decoded JSON payload.

        Returns:
            ``{"Ok": ...}`` on success, ``{"Err": {kind: {"msg": ...}}}`` on
            any taxonomy error.

        Raises:
            UnknownOperationError: If no operation has that name.
            PayloadError: If the payload does not match the schema.
        """
        entry = OPERATIONS.get(operation)
        if entry is None:
            raise UnknownOperationError(
                f"Unknown operation: {operation}", operation=operation
            )

        try:
            decoded = entry.schema.model_validate(payload)
        except ValidationError as e:
            details = tuple(
                f"{'.'.join(str(p) for p in item['loc'])}: {item['msg']}"
                for item in e.errors()
            )
            raise PayloadError(
                f"Invalid payload for {operation}",
                operation=operation,
                details=details,
                cause=e,
            )

        try:
            result = entry.handler(self.service)(decoded.to_domain())
        except BookingError as e:
            if e.kind is None:
                raise
            self._logger.debug(
                "Operation returned error",
                extra={"operation": operation, "kind": e.kind},
            )
            return err(e)

        return ok(result if entry.returns_record else None)
