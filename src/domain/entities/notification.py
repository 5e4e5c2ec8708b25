"""
Notification Entity
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import JSON, DateTime, Field, Index

from .church_record import ChurchRecord
from .enums import NotificationPriority, NotificationType


class Notification(ChurchRecord, table=True):
    """
    Notification entity - one row per recipient account.

    Business Rules:
    - Marking as read is idempotent: read_at keeps the first read time
    """

    __tablename__ = "notifications"

    recipient_id: UUID = Field(foreign_key="accounts.id", nullable=False, index=True)
    type: NotificationType = Field(default=NotificationType.general)
    title: str = Field(max_length=200)
    message: str = Field(max_length=1000)
    priority: NotificationPriority = Field(default=NotificationPriority.normal)
    channels: List[str] = Field(default_factory=list, sa_type=JSON)

    is_read: bool = Field(default=False)
    read_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    is_archived: bool = Field(default=False)

    __table_args__ = (
        Index("idx_notification_recipient_read", "recipient_id", "is_read"),
    )
