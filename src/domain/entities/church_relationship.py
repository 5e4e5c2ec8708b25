"""
ChurchRelationship Entity

Links an Account to a Church with a role.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from ..base import utcnow
from .enums import ChurchRole

if TYPE_CHECKING:
    from .account import Account
    from .church import Church


class ChurchRelationship(SQLModel, table=True):
    """
    ChurchRelationship entity - links Account to Church with a role.

    Business Rules:
    - The church creator holds an admin relationship
    - Admin relationships granted by the owner count as admin staff
    - (account_id, church_id) must be unique
    """

    __tablename__ = "church_relationships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    account_id: UUID = Field(foreign_key="accounts.id", nullable=False, index=True)
    church_id: UUID = Field(foreign_key="churches.id", nullable=False, index=True)

    role: ChurchRole = Field(default=ChurchRole.member, nullable=False)

    joined_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    # Relationships
    account: "Account" = Relationship(back_populates="churches")
    church: "Church" = Relationship(back_populates="relationships")

    __table_args__ = (
        Index("idx_relationship_account_church", "account_id", "church_id", unique=True),
        Index("idx_relationship_role", "role"),
    )
