from abc import abstractmethod
from uuid import UUID

from src.domain.entities import DonationCampaign

from .church_record_repository import IChurchRecordRepository


class ICampaignRepository(IChurchRecordRepository[DonationCampaign]):
    """DonationCampaign repository interface"""

    @abstractmethod
    async def count_open_by_owner(self, owner_id: UUID) -> int:
        """Count draft, active and paused campaigns across churches owned by owner_id"""
        pass
