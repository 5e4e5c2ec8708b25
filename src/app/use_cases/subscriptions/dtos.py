"""
Subscription Use Case DTOs (Data Transfer Objects)

Entitlement decisions, plan catalog and subscription views.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import AccountSubscription
from src.domain.plans import LIMITED_ACTIONS, PlanDefinition, get_plan


# ============================================================================
# Entitlement
# ============================================================================


class EntitlementDecision(BaseModel):
    """Outcome of an entitlement check; denials carry an upgrade hint"""

    allowed: bool
    reason: Optional[str] = None
    action: Optional[str] = None
    current_plan: str
    required_plan: Optional[str] = None
    available_plans: Optional[List[str]] = None
    limit: Optional[int] = None
    current: Optional[int] = None


# ============================================================================
# Response DTOs
# ============================================================================


class PlanInfo(BaseModel):
    """Plan catalog entry"""

    name: str
    display_name: str
    description: str
    price: Dict[str, Any]
    limits: Dict[str, Union[int, str]]
    features: List[str]

    @classmethod
    def from_plan(cls, plan: PlanDefinition) -> "PlanInfo":
        return cls(
            name=plan.name.value,
            display_name=plan.display_name,
            description=plan.description,
            price={"amount": plan.monthly_price, "currency": plan.currency, "billing_cycle": "monthly"},
            limits={
                action: "unlimited" if plan.limit_for(action) is None else plan.limit_for(action)
                for action in LIMITED_ACTIONS
            },
            features=list(plan.features),
        )


class SubscriptionResponse(BaseModel):
    """Account subscription view"""

    id: UUID
    plan_name: str
    display_name: str
    status: str
    billing_cycle: str
    current_period_start: datetime
    current_period_end: datetime
    next_billing_date: datetime
    auto_renew: bool
    payment_method: Optional[str] = None
    cancellation: Optional[Dict[str, Any]] = None

    @classmethod
    def from_entity(cls, subscription: AccountSubscription) -> "SubscriptionResponse":
        return cls(
            id=subscription.id,
            plan_name=subscription.plan_name.value,
            display_name=get_plan(subscription.plan_name).display_name,
            status=subscription.status.value,
            billing_cycle=subscription.billing_cycle.value,
            current_period_start=subscription.current_period_start,
            current_period_end=subscription.current_period_end,
            next_billing_date=subscription.next_billing_date,
            auto_renew=subscription.auto_renew,
            payment_method=(
                subscription.payment_method.value if subscription.payment_method else None
            ),
            cancellation=subscription.cancellation,
        )


class SubscriptionInfo(BaseModel):
    """Resolved plan for display; subscription is None on the free tier"""

    plan: PlanInfo
    is_free: bool
    subscription: Optional[SubscriptionResponse] = None


class UsageSummary(BaseModel):
    """Limits, usage, remaining and percentage per limited action"""

    plan: str
    limits: Dict[str, Union[int, str]]
    usage: Dict[str, int]
    remaining: Dict[str, Union[int, str]]
    percentages: Dict[str, float]


class CancellationResponse(BaseModel):
    reason: Optional[str] = None
    effective_date: datetime


class BillingHistoryResponse(BaseModel):
    billing_history: List[Dict[str, Any]]


class SubscriptionAnalytics(BaseModel):
    """Subscription statistics across all accounts"""

    total_subscriptions: int
    by_status: Dict[str, int]
    active_by_plan: Dict[str, int]
    monthly_revenue: Dict[str, Dict[str, float]]


class ExpireLapsedResponse(BaseModel):
    expired: int
