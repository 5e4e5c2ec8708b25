from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import col, func, or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.church_repository import IChurchRepository
from src.domain.entities import Church


class ChurchRepository(IChurchRepository):
    """Church repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, church_id: UUID) -> Optional[Church]:
        """Get church by ID"""
        stmt = select(Church).where(Church.id == church_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, church: Church) -> Church:
        """Create a new church"""
        self.session.add(church)
        await self.session.flush()
        await self.session.refresh(church)
        return church

    async def update(self, church: Church) -> Church:
        """Update existing church"""
        self.session.add(church)
        await self.session.flush()
        await self.session.refresh(church)
        return church

    async def list_active(
        self,
        search: Optional[str] = None,
        denomination: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Church], int]:
        """List active churches for the public directory"""
        conditions = [Church.is_active == True]  # noqa: E712
        if denomination:
            conditions.append(Church.denomination == denomination)
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    col(Church.name).ilike(pattern),
                    col(Church.description).ilike(pattern),
                )
            )

        count_stmt = select(func.count()).select_from(Church).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(Church)
            .where(*conditions)
            .order_by(col(Church.name))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def get_by_ids(self, church_ids: List[UUID]) -> List[Church]:
        """Get churches by IDs"""
        if not church_ids:
            return []
        stmt = select(Church).where(col(Church.id).in_(church_ids))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_active_owned(self, owner_id: UUID) -> int:
        """Count active churches owned by an account"""
        stmt = (
            select(func.count())
            .select_from(Church)
            .where(Church.owner_id == owner_id, Church.is_active == True)  # noqa: E712
        )
        return (await self.session.exec(stmt)).one()
