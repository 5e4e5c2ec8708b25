"""
Expire Lapsed Subscriptions Use Case
"""

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, SubscriptionStatus
from src.libs.result import Result, Return
from .dtos import ExpireLapsedResponse


class ExpireLapsedSubscriptionsUseCase:
    """
    Use case moving active subscriptions whose period ended to expired.

    Triggered explicitly by an administrator; nothing expires on a timer.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[ExpireLapsedResponse]:
        now = utcnow()
        async with self.uow:
            lapsed = await self.uow.subscriptions.list_lapsed(now)
            for subscription in lapsed:
                subscription.status = SubscriptionStatus.expired
                subscription.updated_at = now
                await self.uow.subscriptions.update(subscription)
                await self.uow.audit_events.create(
                    AuditEvent(
                        account_id=subscription.account_id,
                        action="subscription_expired",
                        event_metadata={"plan": subscription.plan_name.value},
                    )
                )
            await self.uow.commit()

            return Return.ok(ExpireLapsedResponse(expired=len(lapsed)))
