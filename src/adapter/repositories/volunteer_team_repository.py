from uuid import UUID

from sqlmodel import col, func, select

from src.app.repositories.volunteer_team_repository import IVolunteerTeamRepository
from src.domain.entities import Church, VolunteerTeam

from .church_record_repository import ChurchScopedRepository


class VolunteerTeamRepository(ChurchScopedRepository[VolunteerTeam], IVolunteerTeamRepository):
    """VolunteerTeam repository implementation using SQLModel"""

    model = VolunteerTeam

    async def count_active_by_owner(self, owner_id: UUID) -> int:
        owned = select(Church.id).where(Church.owner_id == owner_id)
        stmt = (
            select(func.count())
            .select_from(VolunteerTeam)
            .where(
                col(VolunteerTeam.church_id).in_(owned),
                VolunteerTeam.is_active == True,  # noqa: E712
            )
        )
        return (await self.session.exec(stmt)).one()
