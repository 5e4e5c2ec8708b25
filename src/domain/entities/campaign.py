"""
DonationCampaign Entity
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, DateTime, Field, Index

from .church_record import LifecycleRecord
from .enums import CampaignStatus, Currency


class DonationCampaign(LifecycleRecord, table=True):
    """
    DonationCampaign entity.

    Business Rules:
    - Lifecycle: draft -> active -> paused | cancelled | completed,
      paused -> active | cancelled | completed
    - raised_amount only grows through completed donations
    - updates is an append-only progress log
    """

    __tablename__ = "donation_campaigns"

    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    category: Optional[str] = Field(default=None, max_length=50)
    target_amount: float = Field(gt=0)
    raised_amount: float = Field(default=0)
    currency: Currency = Field(default=Currency.NGN)
    start_date: Optional[datetime] = Field(default=None, sa_type=DateTime)
    end_date: Optional[datetime] = Field(default=None, sa_type=DateTime)

    status: CampaignStatus = Field(default=CampaignStatus.draft)
    updates: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)

    __table_args__ = (Index("idx_campaign_church_status", "church_id", "status"),)

    @property
    def progress_percentage(self) -> float:
        return round(min(100.0, self.raised_amount / self.target_amount * 100), 2)
