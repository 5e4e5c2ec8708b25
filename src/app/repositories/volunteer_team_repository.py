from abc import abstractmethod
from uuid import UUID

from src.domain.entities import VolunteerTeam

from .church_record_repository import IChurchRecordRepository


class IVolunteerTeamRepository(IChurchRecordRepository[VolunteerTeam]):
    """VolunteerTeam repository interface"""

    @abstractmethod
    async def count_active_by_owner(self, owner_id: UUID) -> int:
        """Count active teams across churches owned by owner_id"""
        pass
