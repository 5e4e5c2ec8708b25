"""
Subscribe Use Case

Starts a new subscription, cancelling the account's previous active one.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import (
    AccountSubscription,
    AuditEvent,
    BillingCycle,
    PaymentMethod,
    PlanName,
    SubscriptionStatus,
)
from src.domain.plans import PlanDefinition, get_plan
from src.libs.result import Error, Result, Return
from .dtos import SubscriptionResponse
from .plan_resolution import (
    billing_entry,
    billing_period,
    count_usage,
    exceeded_limits,
)


class SubscribeCommand(BaseModel):
    """Command to start a subscription"""

    plan_name: PlanName
    billing_cycle: BillingCycle = BillingCycle.monthly
    payment_method: Optional[PaymentMethod] = None
    payment_details: Optional[Dict[str, Any]] = None
    auto_renew: bool = True


async def start_subscription(
    uow: UnitOfWork,
    account_id: UUID,
    plan: PlanDefinition,
    command: SubscribeCommand,
    previous: Optional[AccountSubscription],
) -> AccountSubscription:
    """
    Cancel previous (if any) and create the new active subscription.

    Keeps at most one active subscription per account. Caller commits.
    """
    now = utcnow()
    if previous is not None and previous.status == SubscriptionStatus.active:
        previous.status = SubscriptionStatus.cancelled
        previous.auto_renew = False
        previous.cancellation = {
            "reason": f"Replaced by {plan.name.value} plan",
            "cancelled_at": now.isoformat(),
            "effective_date": now.isoformat(),
        }
        previous.updated_at = now
        await uow.subscriptions.update(previous)

    period_start, period_end = billing_period(command.billing_cycle, now)
    payment_method = command.payment_method.value if command.payment_method else None
    history = []
    if plan.is_paid:
        history.append(
            billing_entry(plan, command.billing_cycle, period_start, period_end, payment_method)
        )

    subscription = AccountSubscription(
        account_id=account_id,
        plan_name=plan.name,
        status=SubscriptionStatus.active,
        billing_cycle=command.billing_cycle,
        current_period_start=period_start,
        current_period_end=period_end,
        next_billing_date=period_end,
        auto_renew=command.auto_renew,
        payment_method=command.payment_method,
        payment_details=command.payment_details or {},
        billing_history=history,
    )
    subscription = await uow.subscriptions.create(subscription)

    await uow.audit_events.create(
        AuditEvent(
            account_id=account_id,
            action="subscription_started",
            event_metadata={
                "plan": plan.name.value,
                "billing_cycle": command.billing_cycle.value,
                "replaced": str(previous.id) if previous is not None else None,
            },
        )
    )
    return subscription


class SubscribeUseCase:
    """
    Use case for subscribing to a plan.

    Business Rules:
    - Subscribing to the plan already current is a conflict
    - Paid plans require a payment method and record a paid billing entry
    - The plan must fit current usage (no silent over-limit downgrade)
    - The previous active subscription is cancelled
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID, command: SubscribeCommand) -> Result[SubscriptionResponse]:
        plan = get_plan(command.plan_name)

        if plan.is_paid and command.payment_method is None:
            return Return.err(
                Error("PAYMENT_METHOD_REQUIRED", "Payment method required for paid plans")
            )

        async with self.uow:
            current = await self.uow.subscriptions.get_active(account_id)
            if (
                current is not None
                and current.plan_name == plan.name
                and current.is_current(utcnow())
            ):
                return Return.err(
                    Error("ALREADY_SUBSCRIBED", "Already subscribed to this plan")
                )

            problems = exceeded_limits(plan, await count_usage(self.uow, account_id))
            if problems:
                return Return.err(
                    Error(
                        "PLAN_LIMITS_EXCEEDED",
                        "Current usage exceeds the limits of this plan",
                        {"problems": problems},
                    )
                )

            subscription = await start_subscription(
                self.uow, account_id, plan, command, current
            )
            await self.uow.commit()

            return Return.ok(SubscriptionResponse.from_entity(subscription))
