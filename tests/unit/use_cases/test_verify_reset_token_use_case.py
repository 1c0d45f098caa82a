"""
Unit tests for VerifyResetTokenUseCase
"""
from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from authflow.app.use_cases.auth import VerifyResetTokenUseCase
from authflow.domain.entities import User

NOW = datetime(2024, 5, 1, 12, 0, 0)


@pytest.mark.asyncio
async def test_valid_token_returns_page_data(mock_uow):
    user = User(
        id=uuid4(),
        email="user@shop.com",
        password_hash="hashed:secret",
        reset_token="b" * 64,
        reset_token_expiration=NOW + timedelta(minutes=30),
    )
    mock_uow.users.get_by_reset_token.return_value = user
    use_case = VerifyResetTokenUseCase(mock_uow, clock=lambda: NOW)

    result = await use_case.execute("b" * 64)

    assert result.is_ok()
    assert result.value.user_id == user.id
    assert result.value.password_token == "b" * 64
    mock_uow.users.get_by_reset_token.assert_called_once_with("b" * 64, NOW)


@pytest.mark.asyncio
async def test_unknown_or_expired_token(mock_uow):
    """The store applies the expiry predicate; no match means invalid"""
    mock_uow.users.get_by_reset_token.return_value = None
    use_case = VerifyResetTokenUseCase(mock_uow, clock=lambda: NOW)

    result = await use_case.execute("c" * 64)

    assert result.is_err()
    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"


@pytest.mark.asyncio
async def test_verify_does_not_consume_token(mock_uow):
    mock_uow.users.get_by_reset_token.return_value = None
    use_case = VerifyResetTokenUseCase(mock_uow, clock=lambda: NOW)

    await use_case.execute("c" * 64)

    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()
