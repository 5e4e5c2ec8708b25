"""
AuditEvent Entity

Immutable log of security-relevant events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from ..base import utcnow


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of account, church and billing events.

    Business Rules:
    - Immutable (never updated or deleted)
    - church_id nullable for account-level events (registration, subscriptions)
    - Metadata stores additional context
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    church_id: Optional[UUID] = Field(default=None, index=True)
    account_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g., "register", "church_created"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_church_action", "church_id", "action"),
    )
