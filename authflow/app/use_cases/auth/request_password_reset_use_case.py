"""
Request Password Reset Use Case

Issues a reset token for an account; the caller mails the reset link.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from authflow.app.services.token_generator import TokenGenerator
from authflow.app.services.unit_of_work import UnitOfWork
from authflow.domain.base import utcnow
from authflow.domain.exceptions import EntropyError
from authflow.libs.result import Error, Result, Return
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

RESET_TOKEN_TTL = timedelta(hours=1)


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Token is 32 random bytes, hex encoded, generated before the lookup
    - No token without a secure random source (ENTROPY_UNAVAILABLE)
    - Unknown email: ACCOUNT_NOT_FOUND, nothing written
    - Token expires exactly 1 hour after the request
    - Token and expiration are written together with a compare-and-swap on
      the previous token; a concurrent request that won the write makes
      this one fail with RESET_ALREADY_PENDING instead of orphaning a token
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_generator: Optional[TokenGenerator] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.token_generator = token_generator or TokenGenerator()
        self.clock = clock

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Email address from the reset form

        Returns:
            Result with the issued token and its expiry, or Error

        Errors:
            - ENTROPY_UNAVAILABLE: no secure random source
            - ACCOUNT_NOT_FOUND: no user with that email
            - RESET_ALREADY_PENDING: lost the race against a concurrent request
        """
        try:
            token = self.token_generator.generate()
        except EntropyError as exc:
            logger.error(f"Cannot issue password reset token: {exc}")
            return Return.err(
                Error("ENTROPY_UNAVAILABLE", "Secure random source unavailable")
            )

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.err(
                    Error("ACCOUNT_NOT_FOUND", "No account with that email found.")
                )

            expires_at = self.clock() + RESET_TOKEN_TTL

            stored = await self.uow.users.set_reset_token(
                user.id, user.reset_token, token, expires_at
            )
            if not stored:
                logger.warning(f"Concurrent password reset request for user {user.id}")
                return Return.err(
                    Error(
                        "RESET_ALREADY_PENDING",
                        "A password reset is already in progress. Please check your email.",
                    )
                )

            await self.uow.commit()

            return Return.ok(
                RequestPasswordResetResponse(
                    email=user.email,
                    token=token,
                    expires_at=expires_at,
                )
            )
