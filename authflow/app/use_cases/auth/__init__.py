"""
Authentication Use Cases

Login, signup, logout and the password reset flow.
"""

from .login_use_case import LoginUseCase
from .signup_use_case import SignupUseCase
from .logout_use_case import LogoutUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .verify_reset_token_use_case import VerifyResetTokenUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    SignupCommand,
    ConfirmPasswordResetCommand,
    LoginResponse,
    SignupResponse,
    RequestPasswordResetResponse,
    ResetTokenInfo,
    ConfirmPasswordResetResponse,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "SignupUseCase",
    "LogoutUseCase",
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs - Commands
    "SignupCommand",
    "ConfirmPasswordResetCommand",
    # DTOs - Responses
    "LoginResponse",
    "SignupResponse",
    "RequestPasswordResetResponse",
    "ResetTokenInfo",
    "ConfirmPasswordResetResponse",
]
