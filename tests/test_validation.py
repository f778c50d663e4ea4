import pytest

from bus_booking.domain.errors import InvalidEmailError, InvalidNameError
from bus_booking.domain.validation import (
    is_valid_email,
    is_valid_name,
    validate_email,
    validate_name,
)


@pytest.mark.parametrize(
    "email",
    [
        "jane@example.com",
        "x@x.com",
        "first.last+tag@sub.domain.org",
        "under_score%1@host-name.io",
    ],
)
def test_valid_emails(email):
    assert is_valid_email(email)
    validate_email(email)


@pytest.mark.parametrize(
    "email",
    [
        "",
        "plainaddress",
        "@example.com",
        "jane@",
        "jane@example",
        "jane@example.c",
        "jane@example.c0m",
        "jane doe@example.com",
        "jane@example.com\n",
    ],
)
def test_invalid_emails(email):
    assert not is_valid_email(email)
    with pytest.raises(InvalidEmailError) as exc:
        validate_email(email)
    assert exc.value.kind == "InvalidEmail"
    assert exc.value.message == "Ensure the email address is of the correct format"


@pytest.mark.parametrize(
    "name",
    [
        "Jane",
        "Jane Doe",
        "Route A",
        "O'Brien",
        "Mary-Jane Watson",
        "Smith, John",
        "J. R. Tolkien",
        "Jane  Doe",
    ],
)
def test_valid_names(name):
    assert is_valid_name(name)
    validate_name(name)


@pytest.mark.parametrize(
    "name",
    [
        "",
        " Jane",
        "Jane ",
        "Bad!!",
        "R2D2",
        "-Jane",
        "Jane--Doe",
        "Route 66",
    ],
)
def test_invalid_names(name):
    assert not is_valid_name(name)
    with pytest.raises(InvalidNameError) as exc:
        validate_name(name)
    assert exc.value.message == "Invalid name"
    assert exc.value.name == name


def test_validate_name_custom_message():
    with pytest.raises(InvalidNameError, match="Invalid route name"):
        validate_name("Bad!!", "Invalid route name")


def test_long_non_matching_name_is_rejected_quickly():
    """Pattern has no nested quantifiers, so this must not hang."""
    assert not is_valid_name("A" * 5000 + "!")
