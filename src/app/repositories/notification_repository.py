from abc import abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import Notification

from .church_record_repository import IChurchRecordRepository


class INotificationRepository(IChurchRecordRepository[Notification]):
    """Notification repository interface"""

    @abstractmethod
    async def get_for_recipient(
        self, notification_id: UUID, recipient_id: UUID
    ) -> Optional[Notification]:
        """Get a notification only if it was sent to the recipient"""
        pass

    @abstractmethod
    async def list_for_recipient(
        self,
        recipient_id: UUID,
        is_read: Optional[bool] = None,
        include_archived: bool = False,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Notification], int]:
        """List a recipient's notifications, newest first"""
        pass

    @abstractmethod
    async def count_unread(self, recipient_id: UUID) -> int:
        """Count unread, unarchived notifications of a recipient"""
        pass

    @abstractmethod
    async def mark_all_read(self, recipient_id: UUID) -> int:
        """Mark every unread notification of a recipient as read"""
        pass

    @abstractmethod
    async def create_many(self, notifications: List[Notification]) -> List[Notification]:
        """Create several notifications in one flush"""
        pass
