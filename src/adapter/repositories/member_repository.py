from typing import List, Optional
from uuid import UUID

from sqlmodel import col, select

from src.app.repositories.member_repository import IMemberRepository
from src.domain.entities import Member

from .church_record_repository import ChurchScopedRepository


class MemberRepository(ChurchScopedRepository[Member], IMemberRepository):
    """Member repository implementation using SQLModel"""

    model = Member

    async def get_active_by_account(
        self, account_id: UUID, church_id: UUID
    ) -> Optional[Member]:
        stmt = (
            select(Member)
            .where(
                Member.account_id == account_id,
                Member.church_id == church_id,
                Member.is_active == True,  # noqa: E712
            )
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_many_in_church(
        self, member_ids: List[UUID], church_id: UUID
    ) -> List[Member]:
        if not member_ids:
            return []
        stmt = select(Member).where(
            col(Member.id).in_(member_ids), Member.church_id == church_id
        )
        result = await self.session.exec(stmt)
        return list(result.all())
