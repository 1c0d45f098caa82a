"""
Use Cases

Auth flows live in auth/; import from there or from this package.
"""

from .auth import (
    LoginUseCase,
    SignupUseCase,
    SignupCommand,
    SignupResponse,
    LogoutUseCase,
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
    ConfirmPasswordResetUseCase,
    ConfirmPasswordResetCommand,
)

__all__ = [
    "LoginUseCase",
    "SignupUseCase",
    "SignupCommand",
    "SignupResponse",
    "LogoutUseCase",
    "RequestPasswordResetUseCase",
    "VerifyResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    "ConfirmPasswordResetCommand",
]
