"""
Login Use Case

Checks email + password and returns the user record for the session.
"""

from authflow.app.services.password_hasher import IPasswordHasher
from authflow.app.services.unit_of_work import UnitOfWork
from authflow.libs.result import Error, Result, Return
from .dtos import LoginResponse

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Unknown email and wrong password fail identically (no enumeration)
    - A bcrypt comparison runs even when the user is missing (no timing leak)
    - On success the caller stores the returned user copy in the session
    """

    def __init__(self, uow: UnitOfWork, hasher: IPasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email (already validated by the request layer)
            password: Plain text password

        Returns:
            Result with LoginResponse, or Error(INVALID_CREDENTIALS)
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                # Spend the same bcrypt work as a real comparison
                self.hasher.compare(password, self.hasher.dummy_hash())
                return Return.err(
                    Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE)
                )

            if not self.hasher.compare(password, user.password_hash):
                return Return.err(
                    Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE)
                )

            return Return.ok(LoginResponse(user_id=user.id, user_data=user.snapshot()))
