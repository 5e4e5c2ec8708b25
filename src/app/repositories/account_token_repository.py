from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import AccountToken, AccountTokenPurpose


class IAccountTokenRepository(ABC):
    """AccountToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: AccountToken) -> AccountToken:
        pass

    @abstractmethod
    async def get_by_hash(
        self, token_hash: str, purpose: AccountTokenPurpose
    ) -> Optional[AccountToken]:
        """Token with this digest and purpose, used or not"""
        pass

    @abstractmethod
    async def update(self, token: AccountToken) -> AccountToken:
        pass

    @abstractmethod
    async def invalidate_outstanding(self, account_id: UUID, purpose: AccountTokenPurpose) -> int:
        """Mark every unused token of the account for purpose as used"""
        pass
