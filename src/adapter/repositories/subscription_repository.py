from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.subscription_repository import ISubscriptionRepository
from src.domain.entities import AccountSubscription, SubscriptionStatus


class SubscriptionRepository(ISubscriptionRepository):
    """AccountSubscription repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_active(self, account_id: UUID) -> Optional[AccountSubscription]:
        stmt = (
            select(AccountSubscription)
            .where(
                AccountSubscription.account_id == account_id,
                AccountSubscription.status == SubscriptionStatus.active,
            )
            .order_by(col(AccountSubscription.created_at).desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_latest(self, account_id: UUID) -> Optional[AccountSubscription]:
        stmt = (
            select(AccountSubscription)
            .where(AccountSubscription.account_id == account_id)
            .order_by(col(AccountSubscription.created_at).desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_by_account(self, account_id: UUID) -> List[AccountSubscription]:
        stmt = (
            select(AccountSubscription)
            .where(AccountSubscription.account_id == account_id)
            .order_by(col(AccountSubscription.created_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_all(self) -> List[AccountSubscription]:
        result = await self.session.exec(select(AccountSubscription))
        return list(result.all())

    async def list_lapsed(self, now: datetime) -> List[AccountSubscription]:
        stmt = select(AccountSubscription).where(
            AccountSubscription.status == SubscriptionStatus.active,
            col(AccountSubscription.current_period_end) < now,
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, subscription: AccountSubscription) -> AccountSubscription:
        """Create a new subscription"""
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

    async def update(self, subscription: AccountSubscription) -> AccountSubscription:
        """Update existing subscription"""
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription
