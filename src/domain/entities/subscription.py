"""
AccountSubscription Entity

An account's paid (or explicitly chosen) plan and its billing period.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import BillingCycle, PaymentMethod, PlanName, SubscriptionStatus


class AccountSubscription(SQLModel, table=True):
    """
    AccountSubscription entity.

    Business Rules:
    - At most one current subscription per account: status=active and
      current_period_end not in the past
    - Subscribing to a new plan cancels the previous active subscription
    - Status: active -> cancelled | expired; renew returns to active
    - billing_history is append-only
    """

    __tablename__ = "account_subscriptions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    account_id: UUID = Field(foreign_key="accounts.id", nullable=False, index=True)

    plan_name: PlanName = Field(nullable=False)
    status: SubscriptionStatus = Field(default=SubscriptionStatus.active)
    billing_cycle: BillingCycle = Field(default=BillingCycle.monthly)

    current_period_start: datetime = Field(sa_column=Column(DateTime))
    current_period_end: datetime = Field(sa_column=Column(DateTime))
    next_billing_date: datetime = Field(sa_column=Column(DateTime))
    auto_renew: bool = Field(default=True)

    payment_method: Optional[PaymentMethod] = Field(default=None)
    payment_details: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    billing_history: List[Dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON)
    )
    cancellation: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_subscription_account_status", "account_id", "status"),
        Index("idx_subscription_status_period", "status", "current_period_end"),
    )

    def is_current(self, now: datetime) -> bool:
        return (
            self.status == SubscriptionStatus.active
            and self.current_period_end >= now
        )
