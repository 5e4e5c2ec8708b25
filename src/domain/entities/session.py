"""
Session Entity

Stores refresh tokens for authentication.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - stores refresh tokens for authentication.

    Business Rules:
    - Refresh tokens are stored as SHA-256 digests (indexed for lookup)
    - Tokens rotate on each refresh
    - Revoked sessions block token refresh (logout, deactivation)
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    account_id: UUID = Field(foreign_key="accounts.id", nullable=False, index=True)

    refresh_token_hash: str = Field(max_length=64, unique=True, index=True)
    revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_revoked", "revoked"),
    )
