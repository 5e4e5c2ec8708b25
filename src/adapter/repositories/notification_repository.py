from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import col, func, select, update

from src.app.repositories.notification_repository import INotificationRepository
from src.domain.base import utcnow
from src.domain.entities import Notification

from .church_record_repository import ChurchScopedRepository


class NotificationRepository(ChurchScopedRepository[Notification], INotificationRepository):
    """Notification repository implementation using SQLModel"""

    model = Notification

    async def get_for_recipient(
        self, notification_id: UUID, recipient_id: UUID
    ) -> Optional[Notification]:
        stmt = select(Notification).where(
            Notification.id == notification_id,
            Notification.recipient_id == recipient_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_for_recipient(
        self,
        recipient_id: UUID,
        is_read: Optional[bool] = None,
        include_archived: bool = False,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Notification], int]:
        conditions = [Notification.recipient_id == recipient_id]
        if is_read is not None:
            conditions.append(Notification.is_read == is_read)
        if not include_archived:
            conditions.append(Notification.is_archived == False)  # noqa: E712

        count_stmt = select(func.count()).select_from(Notification).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(Notification)
            .where(*conditions)
            .order_by(col(Notification.created_at).desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def count_unread(self, recipient_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(Notification)
            .where(
                Notification.recipient_id == recipient_id,
                Notification.is_read == False,  # noqa: E712
                Notification.is_archived == False,  # noqa: E712
            )
        )
        return (await self.session.exec(stmt)).one()

    async def mark_all_read(self, recipient_id: UUID) -> int:
        stmt = (
            update(Notification)
            .where(
                Notification.recipient_id == recipient_id,
                Notification.is_read == False,  # noqa: E712
            )
            .values(is_read=True, read_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def create_many(self, notifications: List[Notification]) -> List[Notification]:
        self.session.add_all(notifications)
        await self.session.flush()
        return notifications
