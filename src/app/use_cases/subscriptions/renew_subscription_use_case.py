"""
Renew Subscription Use Case
"""

from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, BillingCycle, SubscriptionStatus
from src.domain.plans import get_plan
from src.libs.result import Error, Result, Return
from .dtos import SubscriptionResponse
from .plan_resolution import billing_entry, billing_period


class RenewSubscriptionUseCase:
    """
    Use case for renewing the latest subscription.

    Business Rules:
    - Works from active, cancelled or expired
    - Starts a fresh period now: 30 days monthly, 365 days yearly
    - Paid plans append a billing history entry
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, account_id: UUID, billing_cycle: Optional[BillingCycle] = None
    ) -> Result[SubscriptionResponse]:
        async with self.uow:
            subscription = await self.uow.subscriptions.get_latest(account_id)
            if subscription is None:
                return Return.err(Error("NO_SUBSCRIPTION", "No subscription found"))

            plan = get_plan(subscription.plan_name)
            cycle = billing_cycle or subscription.billing_cycle
            period_start, period_end = billing_period(cycle, utcnow())

            previous_status = subscription.status
            subscription.status = SubscriptionStatus.active
            subscription.billing_cycle = cycle
            subscription.current_period_start = period_start
            subscription.current_period_end = period_end
            subscription.next_billing_date = period_end
            subscription.cancellation = None
            subscription.updated_at = utcnow()
            if plan.is_paid:
                subscription.billing_history = [
                    *subscription.billing_history,
                    billing_entry(
                        plan,
                        cycle,
                        period_start,
                        period_end,
                        subscription.payment_method.value if subscription.payment_method else None,
                    ),
                ]
            subscription = await self.uow.subscriptions.update(subscription)

            await self.uow.audit_events.create(
                AuditEvent(
                    account_id=account_id,
                    action="subscription_renewed",
                    event_metadata={
                        "plan": plan.name.value,
                        "from_status": previous_status.value,
                        "billing_cycle": BillingCycle(cycle).value,
                    },
                )
            )
            await self.uow.commit()

            return Return.ok(SubscriptionResponse.from_entity(subscription))
