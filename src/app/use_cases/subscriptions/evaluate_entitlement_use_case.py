"""
Evaluate Entitlement Use Case

Decides whether an account's plan admits one more of a limited action, or
includes a generic feature.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PlanName
from src.domain.plans import (
    FREE_TIER_ACTIONS,
    LIMITED_ACTIONS,
    admits_one_more,
    lowest_plan_admitting,
    plans_in_order,
)
from src.libs.result import Error, Result, Return
from .dtos import EntitlementDecision
from .plan_resolution import USAGE_LABELS, count_usage, resolve_current_plan


class EvaluateEntitlementUseCase:
    """
    Use case for plan-limit checks.

    Business Rules:
    - No current subscription means the free plan
    - A limited action is allowed while usage < limit (None = unlimited)
    - required_plan is the cheapest plan whose limit admits one more
    - On free, only FREE_TIER_ACTIONS are allowed among generic actions;
      paid plans allow a generic action they list as a feature
    - Church-scoped actions count against the church owner's plan
    - Lookup failures are errors, never an implicit allow
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, account_id: UUID, action: str, church_id: Optional[UUID] = None
    ) -> Result[EntitlementDecision]:
        async with self.uow:
            try:
                subject_id = account_id
                if church_id is not None:
                    church = await self.uow.churches.get_by_id(church_id)
                    if church is not None:
                        subject_id = church.owner_id
                plan, _ = await resolve_current_plan(self.uow, subject_id)
                if action in LIMITED_ACTIONS:
                    usage = await count_usage(self.uow, subject_id)
                    current = usage[action]
                else:
                    current = None
            except SQLAlchemyError:
                return Return.err(
                    Error("ENTITLEMENT_LOOKUP_FAILED", "Error checking subscription permissions")
                )

        if current is None:
            return Return.ok(self._generic(plan, action))

        limit = plan.limit_for(action)
        if admits_one_more(limit, current):
            return Return.ok(
                EntitlementDecision(
                    allowed=True,
                    current_plan=plan.name.value,
                    limit=limit,
                    current=current,
                )
            )

        required = lowest_plan_admitting(action, current)
        label = USAGE_LABELS[action]
        if limit == 0:
            reason = f"{plan.display_name} does not include {label}"
        else:
            reason = (
                f"{plan.display_name} allows up to {limit} {label}; "
                f"you already have {current}"
            )
        return Return.ok(
            EntitlementDecision(
                allowed=False,
                reason=reason,
                action="upgrade_subscription",
                current_plan=plan.name.value,
                required_plan=required.name.value if required else None,
                limit=limit,
                current=current,
            )
        )

    @staticmethod
    def _generic(plan, action: str) -> EntitlementDecision:
        if plan.name == PlanName.free:
            allowed = action in FREE_TIER_ACTIONS
        else:
            allowed = plan.has_feature(action)

        if allowed:
            return EntitlementDecision(allowed=True, current_plan=plan.name.value)

        required = next(
            (p for p in plans_in_order() if p.ordinal > plan.ordinal and p.has_feature(action)),
            None,
        )
        return EntitlementDecision(
            allowed=False,
            reason=f"Action not allowed with current subscription: {action}",
            action="upgrade_subscription",
            current_plan=plan.name.value,
            required_plan=required.name.value if required else None,
        )
