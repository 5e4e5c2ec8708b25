"""
Get Subscription Info Use Case
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PlanName
from src.domain.plans import get_plan
from src.libs.result import Result, Return
from .dtos import PlanInfo, SubscriptionInfo, SubscriptionResponse
from .plan_resolution import resolve_current_plan

logger = logging.getLogger(__name__)


class GetSubscriptionInfoUseCase:
    """
    Use case resolving the plan to display for an account.

    Never fails: a lookup error degrades to the free plan.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[SubscriptionInfo]:
        async with self.uow:
            try:
                plan, subscription = await resolve_current_plan(self.uow, account_id)
            except SQLAlchemyError:
                logger.exception("Subscription lookup failed, using free plan")
                return Return.ok(
                    SubscriptionInfo(plan=PlanInfo.from_plan(get_plan(PlanName.free)), is_free=True)
                )

            is_free = plan.name == PlanName.free
            return Return.ok(
                SubscriptionInfo(
                    plan=PlanInfo.from_plan(plan),
                    is_free=is_free,
                    subscription=(
                        SubscriptionResponse.from_entity(subscription)
                        if subscription is not None and not is_free
                        else None
                    ),
                )
            )
