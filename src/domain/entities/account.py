"""
Account Entity

Represents a person who signs in and may operate several churches.
"""

from datetime import datetime
from typing import Any, Dict, Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, Relationship, SQLModel

from ..base import utcnow
from .enums import AccountRole

if TYPE_CHECKING:
    from .church_relationship import ChurchRelationship


def default_preferences() -> Dict[str, Any]:
    return {
        "notifications": {"email": True, "push": True, "sms": False},
        "language": "en",
        "timezone": "Africa/Lagos",
    }


class Account(SQLModel, table=True):
    """
    Account entity - a person who can administer or belong to many churches.

    Business Rules:
    - Email must be unique across all accounts (stored lower-cased)
    - Password stored as bcrypt hash
    - Deactivated rather than deleted; inactive accounts cannot authenticate
    - Church relationships are held in church_relationships
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    email: str = Field(unique=True, index=True, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=11, index=True)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: AccountRole = Field(default=AccountRole.member)
    is_active: bool = Field(default=True)
    is_email_verified: bool = Field(default=False)

    preferences: Dict[str, Any] = Field(
        default_factory=default_preferences, sa_column=Column(JSON)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Relationships
    churches: list["ChurchRelationship"] = Relationship(back_populates="account")

    __table_args__ = (
        Index("idx_account_role", "role"),
        Index("idx_account_is_active", "is_active"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
