"""
User CRUD operations.

This module contains the user repository: inserting registered users and
looking them up by username or email.
"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.exceptions import ConflictError, EmailTakenError, UsernameTakenError
from app.crud.base import CRUDBase
from app.models.user import User
from app.utils.logging_config import get_logger

logger = get_logger(__name__)


# Constraint names as sqlite ("users.username") and postgres ("ix_users_username") report them
USERNAME_CONSTRAINTS = ("users.username", "ix_users_username")
EMAIL_CONSTRAINTS = ("users.email", "ix_users_email")


def _conflict_from(exc: IntegrityError) -> ConflictError:
    """
    Work out which unique index rejected the insert.

    Only the first line of the driver message is inspected. Postgres echoes
    the rejected value on a following DETAIL line, and that value must not
    decide the outcome.
    """
    lines = str(exc.orig).lower().splitlines()
    message = lines[0] if lines else ""
    if any(name in message for name in USERNAME_CONSTRAINTS):
        return UsernameTakenError()
    if any(name in message for name in EMAIL_CONSTRAINTS):
        return EmailTakenError()
    return ConflictError()


class CRUDUser(CRUDBase[User]):
    """
    CRUD operations for User model.
    """

    async def create_user(
        self,
        db: AsyncSession,
        *,
        username: str,
        email: str,
        password_hash: str,
    ) -> User:
        """
        Persist a new user.

        There is no read-before-write uniqueness check: the insert itself is
        what fails when the username or email is taken, so two concurrent
        registrations cannot both succeed.

        Args:
            db: Database session
            username: Validated username
            email: Validated, normalized email
            password_hash: Digest produced by get_password_hash

        Returns:
            Created user instance

        Raises:
            UsernameTakenError: If the username is already registered
            EmailTakenError: If the email is already registered
            StoreUnavailableError: If the database cannot be written
        """
        db_obj = User(username=username, email=email, password_hash=password_hash)
        db.add(db_obj)
        try:
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            conflict = _conflict_from(exc)
            logger.info(f"Registration rejected: {conflict.kind}")
            raise conflict from exc
        except SQLAlchemyError as exc:
            await db.rollback()
            raise self._store_unavailable(exc) from exc

        await db.refresh(db_obj)
        logger.info(f"User registered: id={db_obj.id}")
        return db_obj

    async def get_by_username_or_email(
        self, db: AsyncSession, *, identifier: str
    ) -> Optional[User]:
        """
        Get user whose username or email equals the identifier.

        Args:
            db: Database session
            identifier: Username or email address

        Returns:
            User instance or None if not found

        Raises:
            StoreUnavailableError: If the database cannot be queried
        """
        try:
            result = await db.execute(
                select(User).where(or_(User.username == identifier, User.email == identifier))
            )
        except SQLAlchemyError as exc:
            raise self._store_unavailable(exc) from exc
        return result.scalars().first()


# Create instance of CRUDUser
user = CRUDUser(User)
