from authflow.app.services.password_hasher import IPasswordHasher
from authflow.app.services.unit_of_work import UnitOfWork
from authflow.domain.entities import User
from authflow.domain.entities.user import empty_cart
from authflow.domain.exceptions import EmailAlreadyExistsError
from authflow.libs.result import Error, Result, Return
from .dtos import SignupCommand, SignupResponse


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand (validated business intent)
    - Output: Result[SignupResponse]

    Business Logic:
    1. Hash password with bcrypt cost factor 12
    2. Create User with an empty cart
    3. Duplicate emails are rejected by the unique index on users.email,
       not by a read-then-write check
    4. Commit
    """

    def __init__(self, uow: UnitOfWork, hasher: IPasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(self, command: SignupCommand) -> Result[SignupResponse]:
        """
        Execute signup use case

        Args:
            command: SignupCommand with validated email and password

        Returns:
            Result[SignupResponse], or Error(EMAIL_ALREADY_EXISTS)
        """
        async with self.uow:
            password_hash = self.hasher.hash(command.password)

            user = User(
                email=command.email,
                password_hash=password_hash,
                cart=empty_cart(),
            )

            try:
                user = await self.uow.users.create(user)
            except EmailAlreadyExistsError:
                return Return.err(
                    Error(
                        "EMAIL_ALREADY_EXISTS",
                        "E-Mail exists already, please pick a different one.",
                    )
                )

            await self.uow.commit()

            return Return.ok(SignupResponse(user_id=user.id, email=user.email))
