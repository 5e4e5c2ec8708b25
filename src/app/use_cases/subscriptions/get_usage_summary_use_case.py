"""
Get Usage Summary Use Case
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.plans import LIMITED_ACTIONS
from src.libs.result import Result, Return
from .dtos import UsageSummary
from .plan_resolution import count_usage, resolve_current_plan


class GetUsageSummaryUseCase:
    """
    Use case reporting limits, usage, remaining and percentage used.

    Unlimited actions report "unlimited" and 0 percent.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[UsageSummary]:
        async with self.uow:
            plan, _ = await resolve_current_plan(self.uow, account_id)
            usage = await count_usage(self.uow, account_id)

        limits, remaining, percentages = {}, {}, {}
        for action in LIMITED_ACTIONS:
            limit = plan.limit_for(action)
            if limit is None:
                limits[action] = "unlimited"
                remaining[action] = "unlimited"
                percentages[action] = 0.0
            else:
                limits[action] = limit
                remaining[action] = max(0, limit - usage[action])
                percentages[action] = (
                    round(min(100.0, usage[action] / limit * 100), 2) if limit
                    else (100.0 if usage[action] else 0.0)
                )

        return Return.ok(
            UsageSummary(
                plan=plan.name.value,
                limits=limits,
                usage=usage,
                remaining=remaining,
                percentages=percentages,
            )
        )
