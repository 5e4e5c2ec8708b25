from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import AccountSubscription


class ISubscriptionRepository(ABC):
    """AccountSubscription repository interface - application layer"""

    @abstractmethod
    async def get_active(self, account_id: UUID) -> Optional[AccountSubscription]:
        """Most recent subscription with status=active, regardless of period end"""
        pass

    @abstractmethod
    async def get_latest(self, account_id: UUID) -> Optional[AccountSubscription]:
        """Most recent subscription in any status"""
        pass

    @abstractmethod
    async def list_by_account(self, account_id: UUID) -> List[AccountSubscription]:
        """All subscriptions of an account, newest first"""
        pass

    @abstractmethod
    async def list_all(self) -> List[AccountSubscription]:
        """All subscriptions (analytics)"""
        pass

    @abstractmethod
    async def list_lapsed(self, now: datetime) -> List[AccountSubscription]:
        """Active subscriptions whose period ended before now"""
        pass

    @abstractmethod
    async def create(self, subscription: AccountSubscription) -> AccountSubscription:
        """Create a new subscription"""
        pass

    @abstractmethod
    async def update(self, subscription: AccountSubscription) -> AccountSubscription:
        """Update existing subscription"""
        pass
