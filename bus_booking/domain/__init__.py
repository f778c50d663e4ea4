"""Domain layer - Core business models, errors and validation.

This module contains immutable entity records, operation payloads, typed
errors and the name/email validators. No external dependencies.
"""

from .errors import (
    ERROR_KINDS,
    AlreadyExistsError,
    BookingError,
    ConfigurationError,
    EmptyFieldsError,
    InvalidAdminIdError,
    InvalidEmailError,
    InvalidNameError,
    NotFoundError,
    NotRoutePassengerError,
    PayloadError,
    StorageError,
    UnAuthorizedError,
    UnknownOperationError,
)
from .models import (
    ENTITY_TYPES,
    U64_MAX,
    AddPassengerToRoutePayload,
    Admin,
    AdminPayload,
    Booking,
    BookingPayload,
    Entity,
    EntityKind,
    Passenger,
    PassengerPayload,
    Proposal,
    ProposalPayload,
    Route,
    RoutePayload,
    VotePayload,
)
from .validation import (
    is_valid_email,
    is_valid_name,
    parse_admin_id,
    validate_email,
    validate_name,
)

__all__ = [
    # Models
    "Entity",
    "EntityKind",
    "ENTITY_TYPES",
    "U64_MAX",
    "Admin",
    "Route",
    "Passenger",
    "Booking",
    "Proposal",
    # Payloads
    "AdminPayload",
    "RoutePayload",
    "PassengerPayload",
    "BookingPayload",
    "ProposalPayload",
    "VotePayload",
    "AddPassengerToRoutePayload",
    # Validation
    "validate_email",
    "validate_name",
    "is_valid_email",
    "is_valid_name",
    "parse_admin_id",
    # Errors
    "ERROR_KINDS",
    "BookingError",
    "UnAuthorizedError",
    "NotFoundError",
    "EmptyFieldsError",
    "InvalidAdminIdError",
    "NotRoutePassengerError",
    "AlreadyExistsError",
    "InvalidEmailError",
    "InvalidNameError",
    "ConfigurationError",
    "StorageError",
    "PayloadError",
    "UnknownOperationError",
]
