from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import ChurchRelationship


class IChurchRelationshipRepository(ABC):
    """ChurchRelationship repository interface - application layer"""

    @abstractmethod
    async def get(self, account_id: UUID, church_id: UUID) -> Optional[ChurchRelationship]:
        """Get the relationship between an account and a church"""
        pass

    @abstractmethod
    async def create(self, relationship: ChurchRelationship) -> ChurchRelationship:
        """Create a new relationship"""
        pass

    @abstractmethod
    async def update(self, relationship: ChurchRelationship) -> ChurchRelationship:
        """Update existing relationship"""
        pass

    @abstractmethod
    async def delete(self, relationship: ChurchRelationship) -> None:
        """Delete a relationship"""
        pass

    @abstractmethod
    async def list_by_church(self, church_id: UUID) -> List[ChurchRelationship]:
        """List all relationships of a church"""
        pass

    @abstractmethod
    async def list_by_account(self, account_id: UUID) -> List[ChurchRelationship]:
        """List all relationships of an account"""
        pass

    @abstractmethod
    async def count_admin_staff_by_owner(self, owner_id: UUID) -> int:
        """
        Count admin relationships on churches owned by owner_id,
        excluding the owner's own relationships.
        """
        pass
