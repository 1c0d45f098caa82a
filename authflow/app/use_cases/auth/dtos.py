"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth flows.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class SignupCommand(BaseModel):
    """
    Signup command - represents validated signup intent

    Created by API layer after request validation passes
    (email shape, password confirmation).
    """

    email: str
    password: str


class ConfirmPasswordResetCommand(BaseModel):
    """New password submitted from the reset link page"""

    user_id: UUID
    token: str
    new_password: str


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(BaseModel):
    """Authenticated user, ready to be copied into the session"""

    user_id: UUID
    user_data: dict


class SignupResponse(BaseModel):
    """Response for user signup use case"""

    user_id: UUID
    email: str


class RequestPasswordResetResponse(BaseModel):
    """
    Response for request password reset use case.

    Carries the plain token so the caller can mail the reset link.
    """

    email: str
    token: str
    expires_at: datetime


class ResetTokenInfo(BaseModel):
    """Validated reset link - data for the new password page"""

    user_id: UUID
    password_token: str


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    status: str
    message: str
    sessions_revoked: int
