from datetime import timedelta

import pytest

from authflow.adapter.repositories.user_repository import UserRepository
from authflow.domain.base import utcnow
from authflow.domain.entities import User
from authflow.domain.exceptions import EmailAlreadyExistsError


async def create_user(db_session, email="user@shop.com") -> User:
    repo = UserRepository(db_session)
    user = await repo.create(User(email=email, password_hash="x" * 60))
    await db_session.commit()
    return user


@pytest.mark.asyncio
async def test_duplicate_email_is_rejected_by_store(db_session):
    await create_user(db_session)
    repo = UserRepository(db_session)

    with pytest.raises(EmailAlreadyExistsError):
        await repo.create(User(email="user@shop.com", password_hash="y" * 60))

    await db_session.rollback()


@pytest.mark.asyncio
async def test_set_reset_token_compare_and_swap(db_session):
    """Only a writer that saw the current token may replace it"""
    user = await create_user(db_session)
    repo = UserRepository(db_session)
    expires_at = utcnow() + timedelta(hours=1)

    first = await repo.set_reset_token(user.id, None, "a" * 64, expires_at)
    await db_session.commit()
    # A second writer that also read "no token" loses
    second = await repo.set_reset_token(user.id, None, "b" * 64, expires_at)
    await db_session.commit()

    assert first is True
    assert second is False

    found = await repo.get_by_reset_token("a" * 64, utcnow())
    assert found is not None
    assert found.id == user.id
    assert await repo.get_by_reset_token("b" * 64, utcnow()) is None


@pytest.mark.asyncio
async def test_expired_token_is_not_found(db_session):
    user = await create_user(db_session)
    repo = UserRepository(db_session)
    now = utcnow()

    await repo.set_reset_token(user.id, None, "c" * 64, now)
    await db_session.commit()

    # Expiration equal to now is already expired
    assert await repo.get_by_reset_token("c" * 64, now) is None
    assert await repo.get_by_id_and_reset_token(user.id, "c" * 64, now) is None
    assert await repo.get_by_reset_token("c" * 64, now - timedelta(seconds=1)) is not None
