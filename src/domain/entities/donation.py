"""
Donation Entity
"""

from typing import Optional
from uuid import UUID

from sqlmodel import Field, Index

from .church_record import LifecycleRecord
from .enums import Currency, DonationPaymentMethod, DonationStatus


class Donation(LifecycleRecord, table=True):
    """
    Donation entity.

    Business Rules:
    - amount is strictly positive
    - campaign_id, when set, references a campaign of the same church
    - Completed donations count towards the campaign's raised amount
    """

    __tablename__ = "donations"

    campaign_id: Optional[UUID] = Field(
        default=None, foreign_key="donation_campaigns.id", index=True
    )
    donor_account_id: Optional[UUID] = Field(default=None, foreign_key="accounts.id")
    donor_name: Optional[str] = Field(default=None, max_length=100)
    is_anonymous: bool = Field(default=False)

    amount: float = Field(gt=0)
    currency: Currency = Field(default=Currency.NGN)
    category: Optional[str] = Field(default=None, max_length=50)
    payment_method: DonationPaymentMethod = Field(default=DonationPaymentMethod.cash)
    reference: Optional[str] = Field(default=None, max_length=100)
    status: DonationStatus = Field(default=DonationStatus.completed)

    __table_args__ = (Index("idx_donation_church_status", "church_id", "status"),)
