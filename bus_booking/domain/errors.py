"""Typed domain errors for the bus booking core.

Every failure of a domain operation is raised as one of the errors below.
The ``kind`` class attribute is the tag used when an error is encoded as a
tagged result (see ``api/dispatcher.py``); the set of taxonomy kinds is
closed and listed in ``ERROR_KINDS``.

Infrastructure errors (configuration, storage, payload decoding) inherit
from ``BookingError`` too but carry no taxonomy kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple


@dataclass
class BookingError(Exception):
    """Base error for the bus booking domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    kind: ClassVar[Optional[str]] = None

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class UnAuthorizedError(BookingError):
    """Caller is not allowed to perform the operation.

    Reserved for access control; no operation raises it yet.
    """

    kind: ClassVar[Optional[str]] = "UnAuthorized"


@dataclass
class NotFoundError(BookingError):
    """A referenced entity does not exist.

    Attributes:
        entity: Entity kind that was looked up (e.g. 'route')
        entity_id: Identifier that was not found
    """

    kind: ClassVar[Optional[str]] = "NotFound"

    entity: str = ""
    entity_id: Optional[int] = None


@dataclass
class EmptyFieldsError(BookingError):
    """A required string field is empty.

    Attributes:
        fields: Names of the empty fields
    """

    kind: ClassVar[Optional[str]] = "EmptyFields"

    fields: Tuple[str, ...] = ()


@dataclass
class InvalidAdminIdError(BookingError):
    """An admin id arrived as text that is not a valid identifier.

    Attributes:
        raw_value: The value as received
    """

    kind: ClassVar[Optional[str]] = "InvalidAdminId"

    raw_value: str = ""


@dataclass
class NotRoutePassengerError(BookingError):
    """Passenger is not a member of the route.

    Reserved for route-membership gating; no operation raises it yet.
    """

    kind: ClassVar[Optional[str]] = "NotRoutePassenger"

    route_id: Optional[int] = None
    passenger_id: Optional[int] = None


@dataclass
class AlreadyExistsError(BookingError):
    """A uniqueness or duplicate-membership constraint was violated.

    Attributes:
        field_name: Field holding the duplicated value
        value: The duplicated value, as text
    """

    kind: ClassVar[Optional[str]] = "AlreadyExists"

    field_name: str = ""
    value: str = ""


@dataclass
class InvalidEmailError(BookingError):
    """Email address does not match the accepted format."""

    kind: ClassVar[Optional[str]] = "InvalidEmail"

    email: str = ""


@dataclass
class InvalidNameError(BookingError):
    """Name does not match the accepted format."""

    kind: ClassVar[Optional[str]] = "InvalidName"

    name: str = ""


@dataclass
class ConfigurationError(BookingError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None


@dataclass
class StorageError(BookingError):
    """Persisted state could not be read or written.

    Attributes:
        file_path: Path of the snapshot file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class PayloadError(BookingError):
    """An operation payload could not be decoded.

    Attributes:
        operation: Operation the payload was sent to
        details: Validation details reported by the schema
    """

    operation: str = ""
    details: Tuple[str, ...] = ()


@dataclass
class UnknownOperationError(BookingError):
    """No operation is registered under the requested name."""

    operation: str = ""


ERROR_KINDS: Tuple[str, ...] = (
    "UnAuthorized",
    "NotFound",
    "EmptyFields",
    "InvalidAdminId",
    "NotRoutePassenger",
    "AlreadyExists",
    "InvalidEmail",
    "InvalidName",
)
