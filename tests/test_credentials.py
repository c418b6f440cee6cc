"""
Tests for registration credential rules.
"""

import pytest

from app.core.credentials import (
    INVALID_EMAIL,
    INVALID_PASSWORD,
    INVALID_USERNAME,
    PASSWORD_SYMBOLS,
    check_credentials,
    validate_credentials,
    validate_email_address,
    validate_password,
    validate_username,
)
from app.core.exceptions import CredentialValidationError

VALID_USERNAME = "john.doe_99"
VALID_EMAIL = "john.doe@example.com"
VALID_PASSWORD = "c0rrect-Horse"


@pytest.mark.parametrize("username", ["abcdef", "a" * 24, "John.Doe", "user_name.1", "123456"])
def test_username_accepted(username):
    """Usernames of 6-24 letters, digits, dots and underscores are valid."""
    assert validate_username(username) is None


@pytest.mark.parametrize(
    "username",
    [
        "",
        "abcde",           # too short
        "a" * 25,          # too long
        "john doe",        # space
        "john-doe",        # dash
        "john@doe",        # at sign
        "johndoe!",        # symbol
    ],
)
def test_username_rejected(username):
    """Usernames with a bad length or a disallowed character are rejected."""
    assert validate_username(username) == INVALID_USERNAME


@pytest.mark.parametrize("email", ["john@example.com", "first.last+tag@sub.example.org"])
def test_email_accepted(email):
    """Syntactically valid addresses pass."""
    assert validate_email_address(email) is None


@pytest.mark.parametrize("email", ["", "notanemail", "john@", "@example.com", "john@@example.com", "john doe@example.com"])
def test_email_rejected(email):
    """Addresses that do not parse are rejected."""
    assert validate_email_address(email) == INVALID_EMAIL


@pytest.mark.parametrize(
    "password",
    ["abcdefgh", "a" * 32, "Passw0rd", "p@$$w0rd!", PASSWORD_SYMBOLS[:32], "x1" + PASSWORD_SYMBOLS],
)
def test_password_accepted(password):
    """Passwords of 8-32 characters from the allowed set are valid."""
    assert validate_password(password) is None


@pytest.mark.parametrize("symbol", list(PASSWORD_SYMBOLS))
def test_password_accepts_each_allowed_symbol(symbol):
    """Every symbol of the allowed set is accepted on its own."""
    assert validate_password("abcdefg" + symbol) is None


@pytest.mark.parametrize(
    "password",
    [
        "short1",          # too short
        "a" * 33,          # too long
        "password#1",      # '#' is not allowed
        'password"1',      # double quote
        "pass word1",      # space
        "password;1",      # semicolon
        "password<1>",     # angle brackets
    ],
)
def test_password_rejected(password):
    """A bad length or one disallowed character rejects the password."""
    assert validate_password(password) == INVALID_PASSWORD


def test_check_credentials_valid():
    """Valid input yields no violations."""
    assert check_credentials(VALID_USERNAME, VALID_EMAIL, VALID_PASSWORD) == []


def test_check_credentials_reports_every_violation_in_order():
    """All broken rules are reported, username first, password last."""
    assert check_credentials("bad", "bad", "bad") == [
        INVALID_USERNAME,
        INVALID_EMAIL,
        INVALID_PASSWORD,
    ]
    assert check_credentials(VALID_USERNAME, "bad", "bad") == [INVALID_EMAIL, INVALID_PASSWORD]


def test_validate_credentials_returns_normalized_email():
    """The domain part of the email is normalized to lower case."""
    credentials = validate_credentials(VALID_USERNAME, "John.Doe@EXAMPLE.COM", VALID_PASSWORD)
    assert credentials.username == VALID_USERNAME
    assert credentials.email == "John.Doe@example.com"
    assert credentials.password == VALID_PASSWORD


def test_validate_credentials_raises_with_violations():
    """Invalid input raises with the violation kinds attached."""
    with pytest.raises(CredentialValidationError) as exc_info:
        validate_credentials("no", VALID_EMAIL, "#########")

    error = exc_info.value
    assert error.violations == [INVALID_USERNAME, INVALID_PASSWORD]
    assert error.kind == INVALID_USERNAME
    assert error.status_code == 400
    assert error.to_dict()["violations"] == [INVALID_USERNAME, INVALID_PASSWORD]
