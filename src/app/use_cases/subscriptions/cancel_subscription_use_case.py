"""
Cancel Subscription Use Case
"""

from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, SubscriptionStatus
from src.libs.result import Error, Result, Return
from .dtos import CancellationResponse


class CancelSubscriptionUseCase:
    """
    Use case for cancelling the active subscription.

    Business Rules:
    - Cancellation takes effect immediately: the account falls back to free
    - Reason and effective date are recorded on the subscription
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID, reason: Optional[str] = None) -> Result[CancellationResponse]:
        async with self.uow:
            subscription = await self.uow.subscriptions.get_active(account_id)
            if subscription is None:
                return Return.err(
                    Error("NO_ACTIVE_SUBSCRIPTION", "No active subscription found")
                )

            now = utcnow()
            subscription.status = SubscriptionStatus.cancelled
            subscription.auto_renew = False
            subscription.cancellation = {
                "reason": reason,
                "cancelled_at": now.isoformat(),
                "effective_date": now.isoformat(),
            }
            subscription.updated_at = now
            await self.uow.subscriptions.update(subscription)

            await self.uow.audit_events.create(
                AuditEvent(
                    account_id=account_id,
                    action="subscription_cancelled",
                    event_metadata={"plan": subscription.plan_name.value, "reason": reason},
                )
            )
            await self.uow.commit()

            return Return.ok(CancellationResponse(reason=reason, effective_date=now))
