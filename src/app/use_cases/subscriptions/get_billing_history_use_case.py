"""
Get Billing History Use Case
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import BillingHistoryResponse


class GetBillingHistoryUseCase:
    """Billing entries across all of an account's subscriptions, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[BillingHistoryResponse]:
        async with self.uow:
            subscriptions = await self.uow.subscriptions.list_by_account(account_id)
            if not subscriptions:
                return Return.err(Error("NO_SUBSCRIPTION", "No subscription found"))

            entries = []
            for subscription in subscriptions:
                for entry in subscription.billing_history or []:
                    entries.append({**entry, "plan": subscription.plan_name.value})

        entries.sort(key=lambda entry: entry.get("paid_at") or "", reverse=True)
        return Return.ok(BillingHistoryResponse(billing_history=entries))
