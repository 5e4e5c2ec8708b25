from uuid import UUID

from sqlmodel import col, func, select

from src.app.repositories.campaign_repository import ICampaignRepository
from src.domain.entities import Church, DonationCampaign
from src.domain.lifecycle import OPEN_CAMPAIGN_STATUSES

from .church_record_repository import ChurchScopedRepository


class CampaignRepository(ChurchScopedRepository[DonationCampaign], ICampaignRepository):
    """DonationCampaign repository implementation using SQLModel"""

    model = DonationCampaign

    async def count_open_by_owner(self, owner_id: UUID) -> int:
        owned = select(Church.id).where(Church.owner_id == owner_id)
        stmt = (
            select(func.count())
            .select_from(DonationCampaign)
            .where(
                col(DonationCampaign.church_id).in_(owned),
                col(DonationCampaign.status).in_(OPEN_CAMPAIGN_STATUSES),
            )
        )
        return (await self.session.exec(stmt)).one()
