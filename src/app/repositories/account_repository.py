from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by (lower-cased) email address"""
        pass

    @abstractmethod
    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account"""
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Update existing account"""
        pass

    @abstractmethod
    async def list_accounts(
        self,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Account], int]:
        """List accounts matching the filters, with the total match count"""
        pass
