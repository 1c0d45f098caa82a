"""
Session Entity

Server-side HTTP session addressed by an opaque cookie value.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from ..base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - per-browser session state.

    Business Rules:
    - Cookie value is never stored, only its SHA-256 hash
    - user_id set means the browser is logged in; user_data holds a copy
      of the user record taken at login
    - flash is a one-shot slot: written once, cleared on first read
    - Anonymous sessions only exist to carry a flash across a redirect
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    token_hash: str = Field(unique=True, max_length=64)  # SHA-256 output

    user_id: Optional[UUID] = Field(default=None, foreign_key="users.id", index=True)
    user_data: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    flash: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (Index("idx_session_expires_at", "expires_at"),)
