from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from authflow.app.repositories.user_repository import IUserRepository
from authflow.domain.entities import User
from authflow.domain.exceptions import EmailAlreadyExistsError


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by exact email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_reset_token(self, token: str, now: datetime) -> Optional[User]:
        """Get user whose reset token matches and expires after now"""
        stmt = select(User).where(
            User.reset_token == token,
            User.reset_token_expiration > now,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id_and_reset_token(
        self, user_id: UUID, token: str, now: datetime
    ) -> Optional[User]:
        """Same predicate as get_by_reset_token, keyed by user ID"""
        stmt = select(User).where(
            User.id == user_id,
            User.reset_token == token,
            User.reset_token_expiration > now,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # users.email is the only unique column a fresh row can collide on
            raise EmailAlreadyExistsError(user.email) from exc
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def set_reset_token(
        self,
        user_id: UUID,
        expected_token: Optional[str],
        token: str,
        expires_at: datetime,
    ) -> bool:
        """Compare-and-swap on the reset token columns"""
        # `== None` compiles to IS NULL
        stmt = (
            update(User)
            .where(User.id == user_id, User.reset_token == expected_token)
            .values(reset_token=token, reset_token_expiration=expires_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
