"""
Authentication dependencies.

This module contains the dependency that guards endpoints behind a
session token sent as ``Authorization: Bearer <token>``.
"""

from typing import Optional

from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import AuthError, UnauthorizedError
from app.utils.logging_config import get_logger
from app.utils.security import verify_access_token

logger = get_logger(__name__)

# Missing or non-bearer headers are reported by get_current_user_id itself
security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> int:
    """
    Get the ID of the user the session token was issued for.

    Verification is stateless: only the signature and expiry are checked,
    the user store is not consulted.

    Args:
        credentials: HTTP Bearer token credentials

    Returns:
        User ID from the token

    Raises:
        UnauthorizedError: If no bearer token was sent or the token is
            rejected. The verifier's specific kind (MalformedToken,
            InvalidSignature, TokenExpired) is logged and its message kept
            as the detail.
    """
    if credentials is None:
        raise UnauthorizedError()

    try:
        return verify_access_token(credentials.credentials)
    except AuthError as exc:
        logger.info(f"Session token rejected: {exc.kind}")
        raise UnauthorizedError(exc.message) from exc
