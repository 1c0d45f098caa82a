"""
Logout Use Case

Destroys the caller's session.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from authflow.app.services.session_store import SessionStore
from authflow.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logout.

    Business Rules:
    - Logout always "succeeds" for the browser: the route redirects home
      and clears the cookie whatever happens here
    - A store failure is reported as SESSION_DESTROY_FAILED so the route
      can log it instead of showing an error page
    """

    def __init__(self, session_store: SessionStore):
        self.session_store = session_store

    async def execute(self, session_token: Optional[str]) -> Result[bool]:
        """
        Execute logout use case.

        Args:
            session_token: Raw session cookie value, if any

        Returns:
            Result with True if a session was destroyed, or Error
        """
        try:
            destroyed = await self.session_store.destroy(session_token)
        except SQLAlchemyError as exc:
            logger.error(f"Failed to destroy session: {exc}")
            return Return.err(
                Error("SESSION_DESTROY_FAILED", "Session could not be destroyed")
            )

        return Return.ok(destroyed)
