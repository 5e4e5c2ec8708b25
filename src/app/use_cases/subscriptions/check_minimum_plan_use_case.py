"""
Check Minimum Plan Use Case
"""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PlanName
from src.domain.plans import get_plan
from src.libs.result import Error, Result, Return
from .dtos import EntitlementDecision
from .plan_resolution import resolve_current_plan


class CheckMinimumPlanUseCase:
    """
    Use case comparing plan ordinals (free=0, starter=1, organisation=2).

    Denied when the account's current plan ranks below the required one.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID, required: PlanName) -> Result[EntitlementDecision]:
        required_plan = get_plan(required)

        async with self.uow:
            try:
                plan, _ = await resolve_current_plan(self.uow, account_id)
            except SQLAlchemyError:
                return Return.err(
                    Error("ENTITLEMENT_LOOKUP_FAILED", "Error checking subscription permissions")
                )

        if plan.ordinal >= required_plan.ordinal:
            return Return.ok(EntitlementDecision(allowed=True, current_plan=plan.name.value))

        if plan.name == PlanName.free:
            reason = f"This feature requires the {required_plan.display_name} or higher"
        else:
            reason = (
                f"This feature requires the {required_plan.display_name}; "
                f"you are on the {plan.display_name}"
            )
        return Return.ok(
            EntitlementDecision(
                allowed=False,
                reason=reason,
                action="upgrade_subscription",
                current_plan=plan.name.value,
                required_plan=required_plan.name.value,
            )
        )
