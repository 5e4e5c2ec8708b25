"""
Get Subscription Analytics Use Case
"""

from collections import Counter, defaultdict

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Result, Return
from .dtos import SubscriptionAnalytics


class GetSubscriptionAnalyticsUseCase:
    """
    Use case for subscription statistics (global admins only).

    monthly_revenue groups paid billing entries by "YYYY-MM" of payment,
    then by plan.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[SubscriptionAnalytics]:
        now = utcnow()
        async with self.uow:
            subscriptions = await self.uow.subscriptions.list_all()

            by_status = Counter(s.status.value for s in subscriptions)
            active_by_plan = Counter(
                s.plan_name.value for s in subscriptions if s.is_current(now)
            )
            revenue = defaultdict(lambda: defaultdict(float))
            for subscription in subscriptions:
                for entry in subscription.billing_history or []:
                    if entry.get("status") != "paid" or not entry.get("paid_at"):
                        continue
                    month = entry["paid_at"][:7]
                    revenue[month][subscription.plan_name.value] += float(entry["amount"])

        return Return.ok(
            SubscriptionAnalytics(
                total_subscriptions=len(subscriptions),
                by_status=dict(by_status),
                active_by_plan=dict(active_by_plan),
                monthly_revenue={month: dict(plans) for month, plans in sorted(revenue.items())},
            )
        )
