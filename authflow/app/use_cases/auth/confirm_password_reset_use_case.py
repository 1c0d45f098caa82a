"""
Confirm Password Reset Use Case

Replaces the password of the user a valid reset token belongs to.
"""

from datetime import datetime
from typing import Callable

from authflow.app.services.password_hasher import IPasswordHasher
from authflow.app.services.unit_of_work import UnitOfWork
from authflow.domain.base import utcnow
from authflow.libs.result import Error, Result, Return
from .dtos import ConfirmPasswordResetCommand, ConfirmPasswordResetResponse
from .verify_reset_token_use_case import INVALID_RESET_TOKEN_MESSAGE


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - Lookup by user id + token + expiration > now, same predicate as
      opening the link
    - No match: INVALID_OR_EXPIRED_TOKEN and no write of any kind
    - Password is hashed with bcrypt (cost factor 12)
    - reset_token and reset_token_expiration are cleared together with the
      password update, so the token is single-use
    - Existing sessions hold a stale copy of the user and are deleted
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: IPasswordHasher,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.hasher = hasher
        self.clock = clock

    async def execute(
        self, command: ConfirmPasswordResetCommand
    ) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            command: user id and token from the form, plus the new password

        Returns:
            Result with confirmation status, or Error(INVALID_OR_EXPIRED_TOKEN)
        """
        async with self.uow:
            user = await self.uow.users.get_by_id_and_reset_token(
                command.user_id, command.token, self.clock()
            )

            if user is None:
                return Return.err(
                    Error("INVALID_OR_EXPIRED_TOKEN", INVALID_RESET_TOKEN_MESSAGE)
                )

            user.replace_password(self.hasher.hash(command.new_password))
            await self.uow.users.update(user)

            revoked_count = await self.uow.sessions.delete_all_by_user_id(user.id)

            await self.uow.commit()

            return Return.ok(
                ConfirmPasswordResetResponse(
                    status="success",
                    message="Your password has been reset.",
                    sessions_revoked=revoked_count,
                )
            )
