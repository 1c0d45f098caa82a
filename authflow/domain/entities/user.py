"""
User Entity

A storefront customer: login identity, hashed credential and the
pending password-reset state.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, JSON, SQLModel

from ..base import utcnow


def empty_cart() -> dict:
    return {"items": []}


class User(SQLModel, table=True):
    """
    User entity - credential store record.

    Business Rules:
    - Email is unique; the unique index is the only duplicate check
    - Password stored as bcrypt hash (cost factor 12), never plaintext
    - reset_token and reset_token_expiration are both set or both null
    - A reset token is only usable while reset_token_expiration > now
    - Cart starts empty at signup
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    # Password reset (hex of 32 random bytes)
    reset_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=64
    )
    reset_token_expiration: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    cart: dict = Field(default_factory=empty_cart, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    def clear_reset_token(self) -> None:
        self.reset_token = None
        self.reset_token_expiration = None

    def replace_password(self, password_hash: str) -> None:
        """Set a new credential; any pending reset is consumed with it"""
        self.password_hash = password_hash
        self.clear_reset_token()

    def snapshot(self) -> dict:
        """Copy of the record kept in the HTTP session (no credential)"""
        return {
            "id": str(self.id),
            "email": self.email,
            "cart": self.cart,
        }
