import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_reset_token = AsyncMock()
    uow.users.get_by_id_and_reset_token = AsyncMock()
    uow.users.create = AsyncMock()
    uow.users.update = AsyncMock()
    uow.users.set_reset_token = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.get_by_token_hash = AsyncMock()
    uow.sessions.create = AsyncMock()
    uow.sessions.update = AsyncMock()
    uow.sessions.delete = AsyncMock()
    uow.sessions.delete_all_by_user_id = AsyncMock()
    return uow


@pytest.fixture
def mock_hasher():
    """Hasher that 'hashes' by prefixing, so tests can see what was hashed"""
    hasher = MagicMock()
    hasher.hash.side_effect = lambda plaintext: f"hashed:{plaintext}"
    hasher.compare.side_effect = lambda plaintext, password_hash: password_hash == f"hashed:{plaintext}"
    hasher.dummy_hash.return_value = "hashed:dummy_password"
    return hasher
