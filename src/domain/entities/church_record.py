"""
Church-scoped record base

Shared columns for every record owned by exactly one church.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, DateTime, Field, SQLModel

from ..base import utcnow


class ChurchRecord(SQLModel):
    """
    Base for church-scoped tables.

    Business Rules:
    - church_id never changes after creation
    - notes is an append-only trail; individual notes may be edited or
      deleted only through their note id
    """

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    church_id: UUID = Field(foreign_key="churches.id", nullable=False, index=True)
    created_by: Optional[UUID] = Field(default=None, foreign_key="accounts.id")

    notes: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class LifecycleRecord(ChurchRecord):
    """Church-scoped record with a status field and its transition history"""

    status_history: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
