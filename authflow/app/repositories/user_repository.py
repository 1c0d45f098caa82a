from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from authflow.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by exact email address"""
        pass

    @abstractmethod
    async def get_by_reset_token(self, token: str, now: datetime) -> Optional[User]:
        """Get user whose reset token matches and expires after now"""
        pass

    @abstractmethod
    async def get_by_id_and_reset_token(
        self, user_id: UUID, token: str, now: datetime
    ) -> Optional[User]:
        """Same predicate as get_by_reset_token, keyed by user ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises EmailAlreadyExistsError on duplicate email."""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def set_reset_token(
        self,
        user_id: UUID,
        expected_token: Optional[str],
        token: str,
        expires_at: datetime,
    ) -> bool:
        """
        Store a reset token only if the current token still equals expected_token.
        Returns False when a concurrent write got there first.
        """
        pass
