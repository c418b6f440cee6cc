"""
Registration credential rules.

Pure syntax checks for username, email and password. Nothing here touches
the database; uniqueness is enforced by the user store at insert time.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from email_validator import EmailNotValidError, validate_email

from app.core.exceptions import CredentialValidationError

USERNAME_MIN_LENGTH = 6
USERNAME_MAX_LENGTH = 24
USERNAME_SYMBOLS = "._"

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 32
PASSWORD_SYMBOLS = "~!@$%^&*()_-+={}[]|:',.?/"

INVALID_USERNAME = "InvalidUsername"
INVALID_EMAIL = "InvalidEmail"
INVALID_PASSWORD = "InvalidPassword"


@dataclass(frozen=True)
class ValidatedCredentials:
    """Registration input that passed every syntax rule."""
    username: str
    email: str
    password: str


def _only_allowed(value: str, symbols: str) -> bool:
    return all(c.isalnum() or c in symbols for c in value)


def validate_username(username: str) -> Optional[str]:
    """Return INVALID_USERNAME if the username breaks a rule, None otherwise."""
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        return INVALID_USERNAME
    if not _only_allowed(username, USERNAME_SYMBOLS):
        return INVALID_USERNAME
    return None


def normalize_email_address(email: str) -> Optional[str]:
    """
    Parse an email address.

    Returns the normalized address, or None if it is not syntactically valid.
    Deliverability (DNS) is not checked.
    """
    try:
        result = validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return None
    return result.normalized


def validate_email_address(email: str) -> Optional[str]:
    """Return INVALID_EMAIL if the address does not parse, None otherwise."""
    if normalize_email_address(email) is None:
        return INVALID_EMAIL
    return None


def validate_password(password: str) -> Optional[str]:
    """Return INVALID_PASSWORD if the password breaks a rule, None otherwise."""
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        return INVALID_PASSWORD
    if not _only_allowed(password, PASSWORD_SYMBOLS):
        return INVALID_PASSWORD
    return None


_MESSAGES = {
    INVALID_USERNAME: (
        f"Username needs to be {USERNAME_MIN_LENGTH} to {USERNAME_MAX_LENGTH} characters "
        "and can only contain letters, numbers, dots and underscores."
    ),
    INVALID_EMAIL: "Email is not a valid address.",
    INVALID_PASSWORD: (
        f"Password needs to be {PASSWORD_MIN_LENGTH} to {PASSWORD_MAX_LENGTH} characters "
        f"and can only contain letters, numbers and symbols {PASSWORD_SYMBOLS}"
    ),
}


def check_credentials(username: str, email: str, password: str) -> List[str]:
    """
    Run every rule and collect the violations.

    Order is always username, email, password. An empty list means valid.
    """
    checks: Tuple[Optional[str], ...] = (
        validate_username(username),
        validate_email_address(email),
        validate_password(password),
    )
    return [violation for violation in checks if violation is not None]


def validate_credentials(username: str, email: str, password: str) -> ValidatedCredentials:
    """
    Validate registration input.

    Args:
        username: Requested username
        email: Requested email address
        password: Plain text password

    Returns:
        ValidatedCredentials with the email in normalized form

    Raises:
        CredentialValidationError: listing every violated rule
    """
    violations = check_credentials(username, email, password)
    if violations:
        raise CredentialValidationError(
            violations, messages=[_MESSAGES[v] for v in violations]
        )
    return ValidatedCredentials(
        username=username,
        email=normalize_email_address(email),
        password=password,
    )
