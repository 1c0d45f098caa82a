import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from config import ApplicationConfig
from authflow.api.error import ClientError, ServerError
from authflow.api.pages import NewPasswordPage, PageResponse, page_from_flash
from authflow.api.utils.session_cookie import clear_session_cookie, redirect
from authflow.app.services.mailer import IMailer
from authflow.app.services.notifications import (
    reset_password_email,
    send_best_effort,
    welcome_email,
)
from authflow.app.services.password_hasher import (
    MAX_PASSWORD_BYTES,
    IPasswordHasher,
    password_fits,
)
from authflow.app.services.session_store import SessionStore
from authflow.app.services.token_generator import TokenGenerator
from authflow.app.services.unit_of_work import UnitOfWork
from authflow.app.use_cases.auth import (
    ConfirmPasswordResetCommand,
    ConfirmPasswordResetUseCase,
    LoginUseCase,
    LogoutUseCase,
    RequestPasswordResetUseCase,
    SignupCommand,
    SignupUseCase,
    VerifyResetTokenUseCase,
)
from authflow.depends import (
    get_mailer,
    get_password_hasher,
    get_session_store,
    get_session_token,
    get_token_generator,
    get_unit_of_work,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


def check_password_length(value: str) -> str:
    if not password_fits(value):
        raise PydanticCustomError(
            "password_too_long",
            "Password must be at most {max_bytes} bytes long.",
            {"max_bytes": MAX_PASSWORD_BYTES},
        )
    return value


# ============================================================================
# Login / Signup / Logout
# ============================================================================


@router.get("/login", response_model=PageResponse)
async def get_login(
    session_token: Optional[str] = Depends(get_session_token),
    session_store: SessionStore = Depends(get_session_store),
):
    """Login page. Shows a pending flash message and the echoed email."""
    flash = await session_store.consume_flash(session_token)
    return page_from_flash("/login", flash)


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")

    check_password = field_validator("password")(check_password_length)


@router.post("/login", status_code=status.HTTP_303_SEE_OTHER)
async def post_login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
    session_token: Optional[str] = Depends(get_session_token),
    session_store: SessionStore = Depends(get_session_store),
):
    """
    User Login

    On success the session receives a copy of the user record and the
    browser is sent home. Wrong email or password flashes a message and
    goes back to the login page with the email (never the password) kept.

    Raises:
        - 500 Internal Server Error: store failure
    """
    use_case = LoginUseCase(uow, hasher)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            session_token = await session_store.flash(
                session_token, error.message, old_input={"email": request.email}
            )
            return redirect("/login", session_token)
        raise ServerError(error)

    login = result.value
    session_token = await session_store.establish(
        session_token, login.user_id, login.user_data
    )
    return redirect("/", session_token)


@router.get("/signup", response_model=PageResponse)
async def get_signup(
    session_token: Optional[str] = Depends(get_session_token),
    session_store: SessionStore = Depends(get_session_store),
):
    """Signup page"""
    flash = await session_store.consume_flash(session_token)
    return page_from_flash("/signup", flash)


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=5, description="User password (min 5 chars)")
    confirm_password: str = Field(..., description="Must equal password")

    check_password = field_validator("password")(check_password_length)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        if "password" in info.data and value != info.data["password"]:
            raise PydanticCustomError("password_mismatch", "Passwords have to match!")
        return value


@router.post("/signup", status_code=status.HTTP_303_SEE_OTHER)
async def post_signup(
    request: SignupRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
    mailer: IMailer = Depends(get_mailer),
    session_token: Optional[str] = Depends(get_session_token),
    session_store: SessionStore = Depends(get_session_store),
):
    """
    User Signup

    Creates the account and redirects to login. The welcome email goes
    out after the response; its failure is only logged.

    Raises:
        - 500 Internal Server Error: store failure
    """
    command = SignupCommand(email=request.email, password=request.password)

    use_case = SignupUseCase(uow, hasher)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            session_token = await session_store.flash(
                session_token, error.message, old_input={"email": request.email}
            )
            return redirect("/signup", session_token)
        raise ServerError(error)

    background_tasks.add_task(send_best_effort, mailer, result.value.email, welcome_email())
    return redirect("/login")


@router.post("/logout", status_code=status.HTTP_303_SEE_OTHER)
async def post_logout(
    session_token: Optional[str] = Depends(get_session_token),
    session_store: SessionStore = Depends(get_session_store),
):
    """
    User Logout

    Always redirects home and clears the cookie; a failure to delete the
    session row is logged only.
    """
    use_case = LogoutUseCase(session_store)
    result = await use_case.execute(session_token)

    if result.is_err():
        logger.warning(f"Logout continued without destroying session: {result.error.code}")

    response = redirect("/")
    clear_session_cookie(response)
    return response


# ============================================================================
# Password reset
# ============================================================================


@router.get("/reset", response_model=PageResponse)
async def get_reset(
    session_token: Optional[str] = Depends(get_session_token),
    session_store: SessionStore = Depends(get_session_store),
):
    """Password reset request page"""
    flash = await session_store.consume_flash(session_token)
    return page_from_flash("/reset", flash)


class ResetRequest(BaseModel):
    """
    Request password reset HTTP request payload
    """

    email: EmailStr = Field(..., description="User email address")


@router.post("/reset", status_code=status.HTTP_303_SEE_OTHER)
async def post_reset(
    request: ResetRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_generator: TokenGenerator = Depends(get_token_generator),
    mailer: IMailer = Depends(get_mailer),
    session_token: Optional[str] = Depends(get_session_token),
    session_store: SessionStore = Depends(get_session_store),
):
    """
    Request Password Reset

    Stores a 1-hour reset token on the account, redirects home and then
    mails the reset link. Unknown emails are told so via a flash message
    on the reset page.

    Raises:
        - 500 Internal Server Error: no secure random source, store failure
    """
    use_case = RequestPasswordResetUseCase(uow, token_generator)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code in ("ACCOUNT_NOT_FOUND", "RESET_ALREADY_PENDING"):
            session_token = await session_store.flash(
                session_token, error.message, old_input={"email": request.email}
            )
            return redirect("/reset", session_token)
        raise ServerError(error)

    reset = result.value
    content = reset_password_email(ApplicationConfig.BASE_URL, reset.token)
    background_tasks.add_task(send_best_effort, mailer, reset.email, content)
    return redirect("/")


@router.get("/reset/{token}", response_model=NewPasswordPage)
async def get_new_password(
    token: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_token: Optional[str] = Depends(get_session_token),
    session_store: SessionStore = Depends(get_session_store),
):
    """
    New Password page for a reset link

    Raises:
        - 400 Bad Request: token unknown, already used or expired
        - 500 Internal Server Error: store failure
    """
    use_case = VerifyResetTokenUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_OR_EXPIRED_TOKEN":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    flash = await session_store.consume_flash(session_token) or {}
    info = result.value
    return NewPasswordPage(
        path="/new-password",
        page_title="New Password",
        error_message=flash.get("message"),
        user_id=str(info.user_id),
        password_token=info.password_token,
    )


class NewPasswordRequest(BaseModel):
    """
    Confirm password reset HTTP request payload
    """

    password: str = Field(..., min_length=5, description="New password (min 5 chars)")
    user_id: UUID = Field(..., description="User ID from the new password page")
    password_token: str = Field(..., min_length=1, description="Token from the reset link")

    check_password = field_validator("password")(check_password_length)


@router.post("/new-password", status_code=status.HTTP_303_SEE_OTHER)
async def post_new_password(
    request: NewPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    Confirm Password Reset

    Replaces the password, clears the reset token and ends every session
    of the user, then redirects to login.

    Raises:
        - 400 Bad Request: token unknown, already used or expired
        - 500 Internal Server Error: store failure
    """
    command = ConfirmPasswordResetCommand(
        user_id=request.user_id,
        token=request.password_token,
        new_password=request.password,
    )

    use_case = ConfirmPasswordResetUseCase(uow, hasher)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_OR_EXPIRED_TOKEN":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return redirect("/login")
