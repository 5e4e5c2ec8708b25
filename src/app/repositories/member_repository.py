from abc import abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Member

from .church_record_repository import IChurchRecordRepository


class IMemberRepository(IChurchRecordRepository[Member]):
    """Member repository interface"""

    @abstractmethod
    async def get_active_by_account(
        self, account_id: UUID, church_id: UUID
    ) -> Optional[Member]:
        """Active member record linking an account to a church"""
        pass

    @abstractmethod
    async def get_many_in_church(
        self, member_ids: List[UUID], church_id: UUID
    ) -> List[Member]:
        """Members of a church among the given IDs"""
        pass
