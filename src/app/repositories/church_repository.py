from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import Church


class IChurchRepository(ABC):
    """Church repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, church_id: UUID) -> Optional[Church]:
        """Get church by ID (active or not)"""
        pass

    @abstractmethod
    async def create(self, church: Church) -> Church:
        """Create a new church"""
        pass

    @abstractmethod
    async def update(self, church: Church) -> Church:
        """Update existing church"""
        pass

    @abstractmethod
    async def list_active(
        self,
        search: Optional[str] = None,
        denomination: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Church], int]:
        """List active churches for the public directory"""
        pass

    @abstractmethod
    async def get_by_ids(self, church_ids: List[UUID]) -> List[Church]:
        """Get churches by IDs"""
        pass

    @abstractmethod
    async def count_active_owned(self, owner_id: UUID) -> int:
        """Count active churches owned by an account"""
        pass
