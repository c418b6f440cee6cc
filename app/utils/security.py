"""
Security utilities.

This module contains password hashing (Argon2id through passlib) and
stateless session token operations (HS256 JWT through python-jose).
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError
from jose.utils import base64url_decode, base64url_encode
from passlib.context import CryptContext

from app.config import settings
from app.core.exceptions import (
    HashingError,
    InvalidSignatureError,
    MalformedTokenError,
    SigningError,
    TokenExpiredError,
)
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

# Argon2id, m=15000 KiB, t=2, p=1
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__memory_cost=15000,
    argon2__rounds=2,
    argon2__parallelism=1,
)


def get_password_hash(password: str) -> str:
    """
    Hash a password.

    A fresh random salt is generated on every call, so hashing the same
    password twice never yields the same digest.

    Args:
        password: Plain text password

    Returns:
        PHC formatted Argon2id digest

    Raises:
        HashingError: If the hasher fails for any reason
    """
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError, RuntimeError) as exc:
        logger.error(f"Password hashing failed: {type(exc).__name__}")
        raise HashingError() from exc


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a password against its hash.

    When there is no stored hash (unknown user) a dummy verification is still
    run so both outcomes take comparable time.

    Args:
        plain_password: Plain text password
        hashed_password: Stored digest, or None if the user does not exist

    Returns:
        True if password matches, False otherwise
    """
    if hashed_password is None:
        pwd_context.dummy_verify()
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be parsed")
        return False


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed session token for a user.

    Args:
        user_id: ID of the authenticated user, stored as the ``sub`` claim
        expires_delta: Token lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT token

    Raises:
        SigningError: If the token could not be signed
    """
    issued_at = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    try:
        return jwt.encode(claims, settings.JWT_SECRET.get_secret_value(), algorithm=settings.ALGORITHM)
    except JWTError as exc:
        logger.error("Session token signing failed")
        raise SigningError() from exc


def _is_canonical_signature(token: str) -> bool:
    """
    True if the signature segment is the exact encoding of its bytes.

    The base64url decoder ignores the unused low bits of the last character,
    so several spellings decode to the same signature. Only the one the
    signer produced is accepted.
    """
    segment = token.rsplit(".", 1)[-1].encode("ascii", errors="replace")
    try:
        return base64url_encode(base64url_decode(segment)) == segment
    except (ValueError, TypeError):
        return False


def verify_access_token(token: str) -> int:
    """
    Verify a session token and return the user ID it was issued for.

    Structure is checked first, then the signature, then expiry, so a
    tampered token is reported as such even when it is also expired.

    Args:
        token: Encoded JWT token

    Returns:
        User ID from the ``sub`` claim

    Raises:
        MalformedTokenError: If the token cannot be parsed or has no valid subject
        InvalidSignatureError: If the signature does not match
        TokenExpiredError: If the token is past its expiry
    """
    try:
        jwt.get_unverified_claims(token)
    except JWTError as exc:
        raise MalformedTokenError() from exc

    if not _is_canonical_signature(token):
        raise InvalidSignatureError()

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.ALGORITHM],
        )
    except ExpiredSignatureError as exc:
        raise TokenExpiredError() from exc
    except JWTClaimsError as exc:
        raise MalformedTokenError() from exc
    except JWTError as exc:
        raise InvalidSignatureError() from exc

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedTokenError() from exc
