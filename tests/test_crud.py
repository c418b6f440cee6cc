"""
Tests for the user repository.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError, EmailTakenError, UsernameTakenError
from app.crud.user import _conflict_from
from app.crud.user import user as user_crud


async def _create(db, username="crud_user", email="crud_user@example.com"):
    return await user_crud.create_user(
        db, username=username, email=email, password_hash="$argon2id$placeholder"
    )


def _integrity_error(message):
    return IntegrityError("INSERT INTO users ...", {}, Exception(message))


@pytest.mark.asyncio
async def test_create_user(db):
    """Creating a user assigns an ID and creation timestamp."""
    user = await _create(db)

    assert user.id is not None
    assert user.username == "crud_user"
    assert user.email == "crud_user@example.com"
    assert user.created_at is not None


@pytest.mark.asyncio
async def test_get_by_username_or_email(db):
    """Users are found by either their username or their email."""
    created = await _create(db)

    by_username = await user_crud.get_by_username_or_email(db, identifier="crud_user")
    by_email = await user_crud.get_by_username_or_email(db, identifier="crud_user@example.com")

    assert by_username is not None and by_username.id == created.id
    assert by_email is not None and by_email.id == created.id


@pytest.mark.asyncio
async def test_get_by_unknown_identifier(db):
    await _create(db)
    assert await user_crud.get_by_username_or_email(db, identifier="nobody_here") is None


@pytest.mark.asyncio
async def test_duplicate_username_rejected(db):
    await _create(db)

    with pytest.raises(UsernameTakenError):
        await _create(db, email="other@example.com")


@pytest.mark.asyncio
async def test_duplicate_email_rejected(db):
    await _create(db)

    with pytest.raises(EmailTakenError):
        await _create(db, username="other_user")


@pytest.mark.asyncio
async def test_session_usable_after_conflict(db):
    """A rejected insert is rolled back and the session keeps working."""
    await _create(db)
    with pytest.raises(UsernameTakenError):
        await _create(db, email="other@example.com")

    second = await _create(db, username="second_user", email="second@example.com")
    assert second.id is not None


@pytest.mark.asyncio
async def test_usernames_are_case_sensitive(db):
    """Usernames differing only in case are distinct users."""
    first = await _create(db, username="CaseUser", email="upper@example.com")
    second = await _create(db, username="caseuser", email="lower@example.com")

    assert first.id != second.id


@pytest.mark.parametrize(
    "message, expected",
    [
        ("UNIQUE constraint failed: users.username", UsernameTakenError),
        ("UNIQUE constraint failed: users.email", EmailTakenError),
        (
            'duplicate key value violates unique constraint "ix_users_username"\n'
            "DETAIL:  Key (username)=(weather_fan) already exists.",
            UsernameTakenError,
        ),
        (
            'duplicate key value violates unique constraint "ix_users_email"\n'
            "DETAIL:  Key (email)=(username@example.com) already exists.",
            EmailTakenError,
        ),
        (
            'duplicate key value violates unique constraint "ix_users_email"\n'
            "DETAIL:  Key (email)=(ix_users_username@example.com) already exists.",
            EmailTakenError,
        ),
    ],
)
def test_conflict_from_constraint_name(message, expected):
    """The violated constraint decides the conflict kind, not the rejected value."""
    assert type(_conflict_from(_integrity_error(message))) is expected


def test_conflict_from_unknown_constraint():
    conflict = _conflict_from(_integrity_error("UNIQUE constraint failed: users.nickname"))
    assert type(conflict) is ConflictError
