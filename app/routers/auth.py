"""
Authentication router.

This module contains the registration and login endpoints.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.credentials import normalize_email_address, validate_credentials
from app.core.exceptions import CredentialValidationError, InvalidCredentialsError
from app.crud.user import user as crud_user
from app.database import get_db
from app.schemas.auth import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse
from app.schemas.base import MessageResponse
from app.utils.logging_config import get_logger
from app.utils.rate_limit import limiter
from app.utils.security import create_access_token, get_password_hash, verify_password

logger = get_logger(__name__)

router = APIRouter(
    tags=["authentication"],
)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": MessageResponse, "description": "Invalid credentials"},
        409: {"model": MessageResponse, "description": "Username or email already registered"},
        503: {"model": MessageResponse, "description": "Registration failed"},
    },
)
@limiter.limit(settings.REGISTER_RATE_LIMIT)
async def register(
    request: Request,
    user_in: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new user.

    Username, email and password are checked against the credential rules
    and every violation is reported. The password is hashed with Argon2id
    before it is persisted.

    Returns:
        RegisterResponse with the new user's ID

    Raises:
        CredentialValidationError: 400 if any field breaks a rule
        UsernameTakenError, EmailTakenError: 409 if the user already exists
        HashingError, StoreUnavailableError: 503
    """
    try:
        credentials = validate_credentials(user_in.username, user_in.email, user_in.password)
    except CredentialValidationError as exc:
        logger.info(f"Registration rejected: {', '.join(exc.violations)}")
        raise

    password_hash = await run_in_threadpool(get_password_hash, credentials.password)

    new_user = await crud_user.create_user(
        db,
        username=credentials.username,
        email=credentials.email,
        password_hash=password_hash,
    )

    return RegisterResponse(user_id=new_user.id)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        401: {"model": MessageResponse, "description": "Username/email or password is wrong"},
        503: {"model": MessageResponse, "description": "Login failed"},
    },
)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    login_in: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Authenticate a user and return a session token.

    The identifier can be either the username or the email. Unknown users
    still go through a password verification against a placeholder hash, and
    both failure cases return the same response.

    Returns:
        TokenResponse with the signed session token

    Raises:
        InvalidCredentialsError: 401 if the user does not exist or the password is wrong
        SigningError, StoreUnavailableError: 503
    """
    identifier = login_in.identifier
    if "@" in identifier:
        identifier = normalize_email_address(identifier) or identifier

    user_obj = await crud_user.get_by_username_or_email(db, identifier=identifier)

    password_match = await run_in_threadpool(
        verify_password,
        login_in.password,
        user_obj.password_hash if user_obj is not None else None,
    )
    if not password_match:
        logger.info("Login rejected: invalid credentials")
        raise InvalidCredentialsError()

    token = create_access_token(user_obj.id)
    logger.info(f"User logged in: id={user_obj.id}")

    return TokenResponse(token=token)
