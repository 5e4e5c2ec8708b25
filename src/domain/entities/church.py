"""
Church Entity

The tenant: every church-scoped record carries its id.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, Relationship, SQLModel

from ..base import utcnow

if TYPE_CHECKING:
    from .church_relationship import ChurchRelationship


def default_settings() -> Dict[str, Any]:
    return {"currency": "NGN", "timezone": "Africa/Lagos", "language": "en"}


class Church(SQLModel, table=True):
    """
    Church entity - the unit of data isolation.

    Business Rules:
    - Created by exactly one account (owner_id), who becomes its admin
    - Deactivated (is_active=False) instead of deleted
    - Services and donation categories are embedded lists with their own ids
    """

    __tablename__ = "churches"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100, index=True)
    description: Optional[str] = Field(default=None, max_length=500)
    denomination: Optional[str] = Field(default=None, max_length=100)

    owner_id: UUID = Field(foreign_key="accounts.id", nullable=False, index=True)
    is_active: bool = Field(default=True)

    address: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    contact: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    pastor: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    services: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    donation_categories: List[Dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON)
    )
    settings: Dict[str, Any] = Field(default_factory=default_settings, sa_column=Column(JSON))
    financial: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    # Relationships
    relationships: list["ChurchRelationship"] = Relationship(back_populates="church")

    __table_args__ = (
        Index("idx_church_owner_active", "owner_id", "is_active"),
    )
