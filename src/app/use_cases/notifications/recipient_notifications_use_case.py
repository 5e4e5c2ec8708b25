"""
Recipient Notifications Use Case

Everything an account does with the notifications addressed to it.
"""

from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.pagination import Page, PageRequest
from src.domain.base import utcnow
from src.libs.result import Error, Result, Return
from .dtos import MarkAllReadResponse, NotificationResponse, UnreadCountResponse


class RecipientNotificationsUseCase:
    """
    Use case for a recipient's inbox.

    Business Rules:
    - An account only sees and changes its own notifications; others are
      reported as not found
    - Marking as read is idempotent and keeps the first read_at
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list(
        self,
        recipient_id: UUID,
        page: PageRequest,
        is_read: Optional[bool] = None,
        include_archived: bool = False,
    ) -> Result[Page[NotificationResponse]]:
        async with self.uow:
            notifications, total = await self.uow.notifications.list_for_recipient(
                recipient_id,
                is_read=is_read,
                include_archived=include_archived,
                offset=page.offset,
                limit=page.limit,
            )
            items = [NotificationResponse.from_entity(n) for n in notifications]

        return Return.ok(Page[NotificationResponse].build(items, total, page))

    async def unread_count(self, recipient_id: UUID) -> Result[UnreadCountResponse]:
        async with self.uow:
            count = await self.uow.notifications.count_unread(recipient_id)
        return Return.ok(UnreadCountResponse(unread=count))

    async def mark_read(self, recipient_id: UUID, notification_id: UUID) -> Result[NotificationResponse]:
        async with self.uow:
            notification = await self.uow.notifications.get_for_recipient(
                notification_id, recipient_id
            )
            if notification is None:
                return Return.err(Error("NOTIFICATION_NOT_FOUND", "Notification not found"))

            if not notification.is_read:
                notification.is_read = True
                notification.read_at = utcnow()
                notification = await self.uow.notifications.update(notification)
                await self.uow.commit()

            return Return.ok(NotificationResponse.from_entity(notification))

    async def mark_all_read(self, recipient_id: UUID) -> Result[MarkAllReadResponse]:
        async with self.uow:
            updated = await self.uow.notifications.mark_all_read(recipient_id)
            await self.uow.commit()
        return Return.ok(MarkAllReadResponse(updated=updated))

    async def archive(self, recipient_id: UUID, notification_id: UUID) -> Result[NotificationResponse]:
        async with self.uow:
            notification = await self.uow.notifications.get_for_recipient(
                notification_id, recipient_id
            )
            if notification is None:
                return Return.err(Error("NOTIFICATION_NOT_FOUND", "Notification not found"))

            notification.is_archived = True
            notification = await self.uow.notifications.update(notification)
            await self.uow.commit()

            return Return.ok(NotificationResponse.from_entity(notification))

    async def delete(self, recipient_id: UUID, notification_id: UUID) -> Result[None]:
        async with self.uow:
            notification = await self.uow.notifications.get_for_recipient(
                notification_id, recipient_id
            )
            if notification is None:
                return Return.err(Error("NOTIFICATION_NOT_FOUND", "Notification not found"))

            await self.uow.notifications.delete(notification)
            await self.uow.commit()
            return Return.ok(None)
