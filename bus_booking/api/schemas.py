"""Request payload schemas. Pydantic only in the api layer.

Each schema decodes one operation's wire payload into the semantic types
the domain expects (64-bit unsigned ids, float amount, bool vote) and
converts itself into the matching domain payload.
"""

from __future__ import annotations

from typing import Annotated, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt

from ..domain.models import (
    U64_MAX,
    AddPassengerToRoutePayload,
    AdminPayload,
    BookingPayload,
    PassengerPayload,
    ProposalPayload,
    RoutePayload,
    VotePayload,
)

EntityId = Annotated[StrictInt, Field(ge=0, le=U64_MAX)]


class PayloadSchema(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class AdminPayloadSchema(PayloadSchema):
    name: str
    email: str

    def to_domain(self) -> AdminPayload:
        return AdminPayload(name=self.name, email=self.email)


class RoutePayloadSchema(PayloadSchema):
    """Route payload. ``admin_id`` may arrive as an integer or decimal text."""

    name: str
    admin_id: Union[StrictInt, str]

    def to_domain(self) -> RoutePayload:
        return RoutePayload(name=self.name, admin_id=self.admin_id)


class PassengerPayloadSchema(PayloadSchema):
    name: str
    email: str

    def to_domain(self) -> PassengerPayload:
        return PassengerPayload(name=self.name, email=self.email)


class BookingPayloadSchema(PayloadSchema):
    route_id: EntityId
    passenger_id: EntityId
    amount: Union[StrictInt, StrictFloat]

    def to_domain(self) -> BookingPayload:
        return BookingPayload(
            route_id=self.route_id,
            passenger_id=self.passenger_id,
            amount=float(self.amount),
        )


class ProposalPayloadSchema(PayloadSchema):
    route_id: EntityId
    proposer_id: EntityId
    description: str

    def to_domain(self) -> ProposalPayload:
        return ProposalPayload(
            route_id=self.route_id,
            proposer_id=self.proposer_id,
            description=self.description,
        )


class VotePayloadSchema(PayloadSchema):
    proposal_id: EntityId
    passenger_id: EntityId
    vote: StrictBool  # True for, False against

    def to_domain(self) -> VotePayload:
        return VotePayload(
            proposal_id=self.proposal_id,
            passenger_id=self.passenger_id,
            vote=self.vote,
        )


class AddPassengerToRoutePayloadSchema(PayloadSchema):
    route_id: EntityId
    passenger_id: EntityId

    def to_domain(self) -> AddPassengerToRoutePayload:
        return AddPassengerToRoutePayload(
            route_id=self.route_id,
            passenger_id=self.passenger_id,
        )
