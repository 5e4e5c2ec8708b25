"""
Notification DTOs
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationType,
    RecipientGroup,
)


class SendNotificationCommand(BaseModel):
    title: str
    message: str
    type: NotificationType = NotificationType.general
    priority: NotificationPriority = NotificationPriority.normal
    channels: List[NotificationChannel] = [NotificationChannel.in_app]
    recipient_group: RecipientGroup = RecipientGroup.all
    recipient_ids: List[UUID] = []


class NotificationResponse(BaseModel):
    id: UUID
    church_id: UUID
    type: str
    title: str
    message: str
    priority: str
    channels: List[str]
    is_read: bool
    read_at: Optional[datetime] = None
    is_archived: bool
    created_by: Optional[UUID] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationResponse":
        return cls(
            id=notification.id,
            church_id=notification.church_id,
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            priority=notification.priority.value,
            channels=list(notification.channels or []),
            is_read=notification.is_read,
            read_at=notification.read_at,
            is_archived=notification.is_archived,
            created_by=notification.created_by,
            created_at=notification.created_at,
        )


class UnreadCountResponse(BaseModel):
    unread: int


class MarkAllReadResponse(BaseModel):
    updated: int


class SendNotificationResponse(BaseModel):
    sent: int
    delivered: int
    recipient_ids: List[UUID]
