"""Syntactic validation of names and email addresses.

Both checks are pure and fail closed: anything that does not match the
pattern is rejected.

The name pattern accepts a letter followed by any mix of letters and
separator pairs, where a separator (apostrophe, comma, period, space or
hyphen) is followed by a letter or a space. This is the language of
``^[a-zA-Z]+(([',. -][a-zA-Z ])?[a-zA-Z]*)*$`` written without nested
quantifiers, so a long non-matching input cannot trigger catastrophic
backtracking.
"""

from __future__ import annotations

import re
from typing import Union

from .errors import InvalidAdminIdError, InvalidEmailError, InvalidNameError
from .models import U64_MAX

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
NAME_PATTERN = re.compile(r"^[a-zA-Z](?:[',. -][a-zA-Z ]|[a-zA-Z])*$")


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_name(name: str) -> bool:
    return NAME_PATTERN.fullmatch(name) is not None


def validate_email(email: str) -> None:
    """Raise InvalidEmailError unless ``email`` looks like local@domain.tld."""
    if not is_valid_email(email):
        raise InvalidEmailError(
            "Ensure the email address is of the correct format",
            email=email,
        )


def validate_name(name: str, message: str = "Invalid name") -> None:
    """Raise InvalidNameError unless ``name`` matches the name pattern.

    Args:
        name: The name to check.
        message: Error message to use on rejection.
    """
    if not is_valid_name(name):
        raise InvalidNameError(message, name=name)


def parse_admin_id(raw: Union[int, str]) -> int:
    """Turn an admin id received as int or decimal text into an id.

    Raises:
        InvalidAdminIdError: If the value is not an integer in the u64 range.
    """
    if isinstance(raw, int):
        value = raw
    else:
        if not raw.isascii() or not raw.isdigit():
            raise InvalidAdminIdError("Invalid admin ID format", raw_value=raw)
        value = int(raw)

    if not 0 <= value <= U64_MAX:
        raise InvalidAdminIdError("Invalid admin ID format", raw_value=str(raw))
    return value
