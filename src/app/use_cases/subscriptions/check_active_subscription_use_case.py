"""
Check Active Subscription Use Case
"""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PlanName
from src.domain.base import utcnow
from src.domain.plans import paid_plan_names
from src.libs.result import Error, Result, Return
from .dtos import EntitlementDecision


class CheckActiveSubscriptionUseCase:
    """
    Use case requiring a paid, active subscription.

    Business Rules:
    - No subscription, or a free one: upgrade_subscription with the paid plans
    - A paid subscription that is not active (or whose period ended):
      renew_subscription
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[EntitlementDecision]:
        async with self.uow:
            try:
                subscription = await self.uow.subscriptions.get_latest(account_id)
            except SQLAlchemyError:
                return Return.err(
                    Error("ENTITLEMENT_LOOKUP_FAILED", "Error checking subscription status")
                )

            if subscription is None or subscription.plan_name == PlanName.free:
                return Return.ok(
                    EntitlementDecision(
                        allowed=False,
                        reason="This action requires a paid subscription",
                        action="upgrade_subscription",
                        current_plan=PlanName.free.value,
                        available_plans=paid_plan_names(),
                    )
                )

            plan_name = subscription.plan_name.value
            if not subscription.is_current(utcnow()):
                return Return.ok(
                    EntitlementDecision(
                        allowed=False,
                        reason="Active subscription required",
                        action="renew_subscription",
                        current_plan=plan_name,
                    )
                )

            return Return.ok(EntitlementDecision(allowed=True, current_plan=plan_name))
