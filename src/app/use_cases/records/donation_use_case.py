"""
Donation Use Case
"""

from typing import Any, Dict, Optional
from uuid import UUID

from src.domain.entities import CampaignStatus, Donation, DonationStatus
from src.domain.lifecycle import DONATION_TRANSITIONS
from src.libs.result import Error
from .church_record_use_case import ChurchRecordUseCase

INITIAL_STATUSES = (DonationStatus.pending, DonationStatus.completed)


class DonationUseCase(ChurchRecordUseCase):
    """
    Donations.

    Business Rules:
    - A donation to a campaign needs an active campaign of the same church
    - New donations start pending or completed
    - Completed donations add to the campaign's raised amount; refunds
      take it back
    - Anonymous donors are shown as "Anonymous"
    """

    collection = "donations"
    model = Donation
    not_found_code = "DONATION_NOT_FOUND"
    label = "Donation"
    transitions = DONATION_TRANSITIONS

    def _view(self, record: Donation) -> Dict[str, Any]:
        view = super()._view(record)
        if record.is_anonymous:
            view["donor_name"] = "Anonymous"
            view["donor_account_id"] = None
        return view

    async def _validate(
        self, church_id: UUID, values: Dict[str, Any], record: Optional[Donation] = None
    ) -> Optional[Error]:
        status = values.get("status")
        if status is not None and status not in INITIAL_STATUSES:
            return Error("INVALID_INITIAL_STATUS", "New donations must be pending or completed")

        campaign_id = values.get("campaign_id")
        if campaign_id is not None:
            campaign = await self.uow.campaigns.get_in_church(campaign_id, church_id)
            if campaign is None:
                return Error("CAMPAIGN_NOT_FOUND", "Campaign not found")
            if campaign.status != CampaignStatus.active:
                return Error("CAMPAIGN_NOT_ACTIVE", "Campaign is not accepting donations")
        return None

    async def _adjust_campaign(self, donation: Donation, delta: float) -> None:
        if donation.campaign_id is None:
            return
        campaign = await self.uow.campaigns.get_in_church(donation.campaign_id, donation.church_id)
        if campaign is not None:
            campaign.raised_amount = max(0.0, (campaign.raised_amount or 0) + delta)
            await self.uow.campaigns.update(campaign)

    async def _after_create(self, record: Donation, actor_id: UUID) -> None:
        if record.status == DonationStatus.completed:
            await self._adjust_campaign(record, record.amount)

    async def _on_transition(
        self, record: Donation, target: str, actor_id: UUID, values: Dict[str, Any]
    ) -> Optional[Error]:
        if target == DonationStatus.completed:
            await self._adjust_campaign(record, record.amount)
        elif target == DonationStatus.refunded:
            await self._adjust_campaign(record, -record.amount)
        return None
