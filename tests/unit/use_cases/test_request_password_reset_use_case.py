"""
Unit tests for RequestPasswordResetUseCase

Tests all business logic with mocked dependencies.
"""
import re
from datetime import datetime, timedelta
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from authflow.app.services.token_generator import TokenGenerator
from authflow.app.use_cases.auth.request_password_reset_use_case import (
    RESET_TOKEN_TTL,
    RequestPasswordResetUseCase,
)
from authflow.domain.entities import User
from authflow.domain.exceptions import EntropyError

NOW = datetime(2024, 5, 1, 12, 0, 0)


def fixed_clock():
    return NOW


def make_user(**overrides):
    fields = dict(id=uuid4(), email="user@shop.com", password_hash="hashed:secret")
    fields.update(overrides)
    return User(**fields)


@pytest.mark.asyncio
async def test_successful_password_reset_request(mock_uow):
    # Arrange
    user = make_user()
    mock_uow.users.get_by_email.return_value = user
    mock_uow.users.set_reset_token.return_value = True

    use_case = RequestPasswordResetUseCase(mock_uow, TokenGenerator(), clock=fixed_clock)

    # Act
    result = await use_case.execute("user@shop.com")

    # Assert
    assert result.is_ok()
    data = result.value
    assert data.email == "user@shop.com"
    assert re.fullmatch(r"[0-9a-f]{64}", data.token)
    assert data.expires_at == NOW + timedelta(milliseconds=3_600_000)

    mock_uow.users.set_reset_token.assert_called_once_with(
        user.id, None, data.token, data.expires_at
    )
    mock_uow.commit.assert_called_once()


def test_reset_token_ttl_is_one_hour():
    assert RESET_TOKEN_TTL == timedelta(hours=1)


@pytest.mark.asyncio
async def test_new_request_replaces_previous_token(mock_uow):
    """A fresh request swaps out whatever token was stored before"""
    user = make_user(reset_token="a" * 64, reset_token_expiration=NOW + timedelta(minutes=5))
    mock_uow.users.get_by_email.return_value = user
    mock_uow.users.set_reset_token.return_value = True

    use_case = RequestPasswordResetUseCase(mock_uow, clock=fixed_clock)

    result = await use_case.execute("user@shop.com")

    assert result.is_ok()
    assert result.value.token != "a" * 64
    args = mock_uow.users.set_reset_token.call_args.args
    assert args[1] == "a" * 64


@pytest.mark.asyncio
async def test_password_reset_unknown_email(mock_uow):
    mock_uow.users.get_by_email.return_value = None
    use_case = RequestPasswordResetUseCase(mock_uow, clock=fixed_clock)

    result = await use_case.execute("ghost@shop.com")

    assert result.is_err()
    assert result.error.code == "ACCOUNT_NOT_FOUND"
    assert result.error.message == "No account with that email found."
    mock_uow.users.set_reset_token.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_password_reset_lost_race(mock_uow):
    """Compare-and-swap lost to a concurrent request: nothing committed"""
    mock_uow.users.get_by_email.return_value = make_user()
    mock_uow.users.set_reset_token.return_value = False
    use_case = RequestPasswordResetUseCase(mock_uow, clock=fixed_clock)

    result = await use_case.execute("user@shop.com")

    assert result.is_err()
    assert result.error.code == "RESET_ALREADY_PENDING"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_password_reset_without_entropy(mock_uow):
    """No secure random source: fail before touching the store"""
    generator = MagicMock()
    generator.generate.side_effect = EntropyError("no urandom")
    use_case = RequestPasswordResetUseCase(mock_uow, generator, clock=fixed_clock)

    result = await use_case.execute("user@shop.com")

    assert result.is_err()
    assert result.error.code == "ENTROPY_UNAVAILABLE"
    mock_uow.users.get_by_email.assert_not_called()
    mock_uow.users.set_reset_token.assert_not_called()
