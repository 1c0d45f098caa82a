"""
Verify Reset Token Use Case

Validates the token from a reset link before the new password form is shown.
"""

from datetime import datetime
from typing import Callable

from authflow.app.services.unit_of_work import UnitOfWork
from authflow.domain.base import utcnow
from authflow.libs.result import Error, Result, Return
from .dtos import ResetTokenInfo

INVALID_RESET_TOKEN_MESSAGE = "Password reset link is invalid or has expired."


class VerifyResetTokenUseCase:
    """
    Use case for opening a reset link.

    Business Rules:
    - Token must match a user's reset_token
    - reset_token_expiration must be strictly after now
    - Read only: nothing is consumed until the new password is submitted
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(self, token: str) -> Result[ResetTokenInfo]:
        async with self.uow:
            user = await self.uow.users.get_by_reset_token(token, self.clock())

            if user is None:
                return Return.err(
                    Error("INVALID_OR_EXPIRED_TOKEN", INVALID_RESET_TOKEN_MESSAGE)
                )

            return Return.ok(ResetTokenInfo(user_id=user.id, password_token=token))
