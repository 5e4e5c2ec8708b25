from typing import List, Optional
from uuid import UUID

from sqlmodel import col, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.church_relationship_repository import (
    IChurchRelationshipRepository,
)
from src.domain.entities import Church, ChurchRelationship, ChurchRole


class ChurchRelationshipRepository(IChurchRelationshipRepository):
    """ChurchRelationship repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, account_id: UUID, church_id: UUID) -> Optional[ChurchRelationship]:
        """Get the relationship between an account and a church"""
        stmt = select(ChurchRelationship).where(
            ChurchRelationship.account_id == account_id,
            ChurchRelationship.church_id == church_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, relationship: ChurchRelationship) -> ChurchRelationship:
        """Create a new relationship"""
        self.session.add(relationship)
        await self.session.flush()
        await self.session.refresh(relationship)
        return relationship

    async def update(self, relationship: ChurchRelationship) -> ChurchRelationship:
        """Update existing relationship"""
        self.session.add(relationship)
        await self.session.flush()
        await self.session.refresh(relationship)
        return relationship

    async def delete(self, relationship: ChurchRelationship) -> None:
        """Delete a relationship"""
        await self.session.delete(relationship)
        await self.session.flush()

    async def list_by_church(self, church_id: UUID) -> List[ChurchRelationship]:
        """List all relationships of a church"""
        stmt = (
            select(ChurchRelationship)
            .where(ChurchRelationship.church_id == church_id)
            .order_by(col(ChurchRelationship.joined_at))
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_by_account(self, account_id: UUID) -> List[ChurchRelationship]:
        """List all relationships of an account"""
        stmt = select(ChurchRelationship).where(
            ChurchRelationship.account_id == account_id
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_admin_staff_by_owner(self, owner_id: UUID) -> int:
        """Count admin relationships on owned churches, owner excluded"""
        owned = select(Church.id).where(Church.owner_id == owner_id)
        stmt = (
            select(func.count())
            .select_from(ChurchRelationship)
            .where(
                col(ChurchRelationship.church_id).in_(owned),
                ChurchRelationship.role == ChurchRole.admin,
                ChurchRelationship.account_id != owner_id,
            )
        )
        return (await self.session.exec(stmt)).one()
