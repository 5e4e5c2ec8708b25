"""
Donation Campaign Use Case
"""

import uuid
from typing import Any, Dict, Optional
from uuid import UUID

from src.domain.base import utcnow
from src.domain.entities import CampaignStatus, DonationCampaign
from src.domain.lifecycle import CAMPAIGN_TRANSITIONS
from src.libs.result import Error, Result, Return
from .church_record_use_case import ChurchRecordUseCase


class CampaignUseCase(ChurchRecordUseCase):
    """
    Donation campaigns.

    Business Rules:
    - end_date, when set, is not before start_date
    - Activation stamps start_date when it is missing
    - Only draft campaigns can be deleted; others are cancelled instead
    """

    collection = "campaigns"
    model = DonationCampaign
    not_found_code = "CAMPAIGN_NOT_FOUND"
    label = "Campaign"
    transitions = CAMPAIGN_TRANSITIONS

    def _view(self, record: DonationCampaign) -> Dict[str, Any]:
        view = super()._view(record)
        view["progress_percentage"] = record.progress_percentage
        return view

    async def _validate(
        self, church_id: UUID, values: Dict[str, Any], record: Optional[DonationCampaign] = None
    ) -> Optional[Error]:
        start = values.get("start_date", record.start_date if record else None)
        end = values.get("end_date", record.end_date if record else None)
        if start is not None and end is not None and end < start:
            return Error("INVALID_DATE_RANGE", "End date must not be before start date")
        return None

    async def _on_transition(
        self, record: DonationCampaign, target: str, actor_id: UUID, values: Dict[str, Any]
    ) -> Optional[Error]:
        if target == CampaignStatus.active and record.start_date is None:
            record.start_date = utcnow()
        return None

    async def _before_delete(self, record: DonationCampaign) -> Optional[Error]:
        if record.status != CampaignStatus.draft:
            return Error("CAMPAIGN_NOT_DRAFT", "Only draft campaigns can be deleted")
        return None

    async def add_update(
        self, church_id: UUID, campaign_id: UUID, actor_id: UUID, title: str, content: str
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            campaign = await self.uow.campaigns.get_in_church(campaign_id, church_id)
            if campaign is None:
                return self._not_found()

            campaign.updates = [
                *(campaign.updates or []),
                {
                    "id": str(uuid.uuid4()),
                    "title": title,
                    "content": content,
                    "created_by": str(actor_id),
                    "created_at": utcnow().isoformat(),
                },
            ]
            campaign.updated_at = utcnow()
            campaign = await self.uow.campaigns.update(campaign)
            await self.uow.commit()

            return Return.ok(self._view(campaign))
