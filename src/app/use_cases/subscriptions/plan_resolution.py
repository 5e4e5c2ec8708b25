"""
Plan resolution and usage counting shared by the subscription use cases.

Callers must already be inside `async with uow`.
"""

import secrets
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AccountSubscription, BillingCycle, PlanName
from src.domain.plans import (
    ADD_ADMIN_STAFF,
    CREATE_CAMPAIGN,
    CREATE_CHURCH,
    CREATE_VOLUNTEER_TEAM,
    LIMITED_ACTIONS,
    PlanDefinition,
    get_plan,
)

PERIOD_DAYS = {BillingCycle.monthly: 30, BillingCycle.yearly: 365}

USAGE_LABELS = {
    CREATE_CHURCH: "churches",
    CREATE_CAMPAIGN: "donation campaigns",
    ADD_ADMIN_STAFF: "admin staff",
    CREATE_VOLUNTEER_TEAM: "volunteer teams",
}


async def resolve_current_plan(
    uow: UnitOfWork, account_id: UUID, now: Optional[datetime] = None
) -> Tuple[PlanDefinition, Optional[AccountSubscription]]:
    """
    Plan the account is entitled to right now.

    No subscription, or an active one whose period has ended, means free.
    """
    now = now or utcnow()
    subscription = await uow.subscriptions.get_active(account_id)
    if subscription is None or not subscription.is_current(now):
        return get_plan(PlanName.free), subscription
    return get_plan(subscription.plan_name), subscription


async def count_usage(uow: UnitOfWork, account_id: UUID) -> Dict[str, int]:
    """Live usage of every limited action"""
    return {
        CREATE_CHURCH: await uow.churches.count_active_owned(account_id),
        CREATE_CAMPAIGN: await uow.campaigns.count_open_by_owner(account_id),
        ADD_ADMIN_STAFF: await uow.church_relationships.count_admin_staff_by_owner(account_id),
        CREATE_VOLUNTEER_TEAM: await uow.volunteer_teams.count_active_by_owner(account_id),
    }


def exceeded_limits(plan: PlanDefinition, usage: Dict[str, int]) -> List[str]:
    """Descriptions of every limit of plan that current usage already exceeds"""
    problems = []
    for action in LIMITED_ACTIONS:
        limit = plan.limit_for(action)
        if limit is not None and usage[action] > limit:
            problems.append(
                f"You have {usage[action]} {USAGE_LABELS[action]} but "
                f"{plan.display_name} allows {limit}"
            )
    return problems


def billing_period(billing_cycle: BillingCycle, start: datetime) -> Tuple[datetime, datetime]:
    return start, start + timedelta(days=PERIOD_DAYS[BillingCycle(billing_cycle)])


def billing_entry(
    plan: PlanDefinition,
    billing_cycle: BillingCycle,
    period_start: datetime,
    period_end: datetime,
    payment_method: Optional[str],
) -> Dict[str, Any]:
    """Billing history record for a paid period"""
    return {
        "id": secrets.token_hex(8),
        "amount": plan.price_for(billing_cycle),
        "currency": plan.currency,
        "status": "paid",
        "billing_cycle": BillingCycle(billing_cycle).value,
        "period_start": period_start.isoformat(),
        "period_end": period_end.isoformat(),
        "paid_at": utcnow().isoformat(),
        "payment_method": payment_method,
        "reference": f"SUB-{secrets.token_hex(6).upper()}",
    }
