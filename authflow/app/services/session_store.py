"""
Session Store

Server-side HTTP sessions plus the per-session one-shot flash slot.
The browser only ever holds the raw cookie value; the database keeps
its SHA-256 hash.
"""

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from pydantic import BaseModel

from authflow.app.services.unit_of_work import UnitOfWork
from authflow.domain.base import utcnow
from authflow.domain.entities import Session

DEFAULT_SESSION_LIFETIME = timedelta(hours=24)


class SessionInfo(BaseModel):
    """Read-only view of a live session"""

    user_id: Optional[UUID] = None
    user_data: Optional[dict] = None

    @property
    def is_logged_in(self) -> bool:
        return self.user_id is not None


def hash_session_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode()).hexdigest()


class SessionStore:
    """
    Session collaborator used by the auth routes.

    Business Rules:
    - establish() always issues a new cookie value (no session fixation)
    - destroy() removes the session row; the caller clears the cookie
    - flash() writes the slot, creating an anonymous session if needed;
      a second write before the read replaces the first
    - consume_flash() returns the slot and clears it in the same commit
    - Expired sessions are deleted when touched and treated as absent
    """

    def __init__(
        self,
        uow: UnitOfWork,
        lifetime: timedelta = DEFAULT_SESSION_LIFETIME,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.lifetime = lifetime
        self.clock = clock

    async def _get_live(self, raw_token: Optional[str]) -> Optional[Session]:
        if not raw_token:
            return None

        session = await self.uow.sessions.get_by_token_hash(hash_session_token(raw_token))
        if session is None:
            return None

        if session.expires_at <= self.clock():
            await self.uow.sessions.delete(session)
            await self.uow.commit()
            return None

        return session

    def _new_session(self, **fields) -> tuple[str, Session]:
        raw_token = secrets.token_urlsafe(32)
        session = Session(
            token_hash=hash_session_token(raw_token),
            expires_at=self.clock() + self.lifetime,
            **fields,
        )
        return raw_token, session

    async def load(self, raw_token: Optional[str]) -> Optional[SessionInfo]:
        """Get the live session for a cookie value, or None"""
        async with self.uow:
            session = await self._get_live(raw_token)
            if session is None:
                return None
            return SessionInfo(user_id=session.user_id, user_data=session.user_data)

    async def establish(
        self, raw_token: Optional[str], user_id: UUID, user_data: dict
    ) -> str:
        """
        Start a logged-in session carrying a copy of the user record.

        Returns:
            New raw cookie value
        """
        async with self.uow:
            previous = await self._get_live(raw_token)
            if previous is not None:
                await self.uow.sessions.delete(previous)

            new_token, session = self._new_session(user_id=user_id, user_data=user_data)
            await self.uow.sessions.create(session)
            await self.uow.commit()
            return new_token

    async def destroy(self, raw_token: Optional[str]) -> bool:
        """Delete the session. Returns True if one existed."""
        async with self.uow:
            session = await self._get_live(raw_token)
            if session is None:
                return False

            await self.uow.sessions.delete(session)
            await self.uow.commit()
            return True

    async def flash(
        self,
        raw_token: Optional[str],
        message: str,
        old_input: Optional[dict] = None,
    ) -> str:
        """
        Store a one-shot message for the next page render.

        Returns:
            Raw cookie value of the session holding the message
        """
        slot = {"message": message, "old_input": old_input or {}}

        async with self.uow:
            session = await self._get_live(raw_token)
            if session is None:
                raw_token, session = self._new_session(flash=slot)
                await self.uow.sessions.create(session)
            else:
                session.flash = slot
                await self.uow.sessions.update(session)

            await self.uow.commit()
            return raw_token

    async def consume_flash(self, raw_token: Optional[str]) -> Optional[dict]:
        """Read and clear the flash slot"""
        async with self.uow:
            session = await self._get_live(raw_token)
            if session is None or session.flash is None:
                return None

            slot = session.flash
            session.flash = None
            await self.uow.sessions.update(session)
            await self.uow.commit()
            return slot
