"""
Notification Use Cases
"""

from .recipient_notifications_use_case import RecipientNotificationsUseCase
from .send_notification_use_case import SendNotificationUseCase
from .dtos import (
    MarkAllReadResponse,
    NotificationResponse,
    SendNotificationCommand,
    SendNotificationResponse,
    UnreadCountResponse,
)

__all__ = [
    "RecipientNotificationsUseCase",
    "SendNotificationUseCase",
    "MarkAllReadResponse",
    "NotificationResponse",
    "SendNotificationCommand",
    "SendNotificationResponse",
    "UnreadCountResponse",
]
