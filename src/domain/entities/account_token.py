"""
AccountToken Entity

One-time tokens mailed to an account.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import AccountTokenPurpose


class AccountToken(SQLModel, table=True):
    """
    AccountToken entity - password reset and email verification tokens.

    Business Rules:
    - Only the SHA-256 digest of the mailed token is stored
    - Single-use: used_at is set when the token is redeemed
    - Issuing a new token for a purpose invalidates the outstanding ones
    """

    __tablename__ = "account_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    account_id: UUID = Field(foreign_key="accounts.id", nullable=False, index=True)
    purpose: AccountTokenPurpose
    token_hash: str = Field(max_length=64, unique=True, index=True)

    expires_at: datetime = Field(sa_column=Column(DateTime))
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_account_token_account_purpose", "account_id", "purpose"),)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now
