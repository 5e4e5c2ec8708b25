"""
Change Plan Use Case

Upgrades (or downgrades) the account's plan.
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.plans import get_plan
from src.libs.result import Error, Result, Return
from .dtos import SubscriptionResponse
from .plan_resolution import count_usage, exceeded_limits, resolve_current_plan
from .subscribe_use_case import SubscribeCommand, start_subscription


class ChangePlanUseCase:
    """
    Use case for changing plan.

    Business Rules:
    - The target plan must differ from the current plan
    - A downgrade is rejected while usage exceeds any of the target's limits
    - A paid target needs a payment method, taken from the command or the
      current subscription
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID, command: SubscribeCommand) -> Result[SubscriptionResponse]:
        target = get_plan(command.plan_name)

        async with self.uow:
            current_plan, current = await resolve_current_plan(self.uow, account_id)

            if current_plan.name == target.name:
                return Return.err(
                    Error("SAME_PLAN", f"Already on the {target.display_name}")
                )

            if target.ordinal < current_plan.ordinal:
                problems = exceeded_limits(target, await count_usage(self.uow, account_id))
                if problems:
                    return Return.err(
                        Error(
                            "DOWNGRADE_EXCEEDS_USAGE",
                            "; ".join(problems),
                            {"problems": problems},
                        )
                    )

            if command.payment_method is None and current is not None:
                command = command.model_copy(update={"payment_method": current.payment_method})

            if target.is_paid and command.payment_method is None:
                return Return.err(
                    Error("PAYMENT_METHOD_REQUIRED", "Payment method required for paid plans")
                )

            subscription = await start_subscription(
                self.uow, account_id, target, command, current
            )
            await self.uow.commit()

            return Return.ok(SubscriptionResponse.from_entity(subscription))
