"""
Volunteer Team Use Case
"""

from typing import Any, Dict, Optional
from uuid import UUID

from src.domain.base import utcnow
from src.domain.entities import VolunteerTeam
from src.libs.result import Error, Result, Return
from .church_record_use_case import PROTECTED_FIELDS, ChurchRecordUseCase


class VolunteerTeamUseCase(ChurchRecordUseCase):
    """
    Volunteer teams and their rosters.

    Business Rules:
    - Leader and roster entries must be members of the same church
    - A member appears at most once on a roster
    - is_active changes only through set_active, so reactivation can be
      checked against the owner's plan
    """

    collection = "volunteer_teams"
    model = VolunteerTeam
    not_found_code = "TEAM_NOT_FOUND"
    label = "Volunteer team"
    protected_fields = PROTECTED_FIELDS | {"is_active"}

    def _view(self, record: VolunteerTeam) -> Dict[str, Any]:
        view = super()._view(record)
        view["member_count"] = len(record.roster or [])
        return view

    async def _validate(
        self, church_id: UUID, values: Dict[str, Any], record: Optional[VolunteerTeam] = None
    ) -> Optional[Error]:
        leader_id = values.get("leader_member_id")
        if leader_id is not None:
            leader = await self.uow.members.get_in_church(leader_id, church_id)
            if leader is None:
                return Error("MEMBER_NOT_FOUND", "Team leader is not a member of this church")
        return None

    async def add_to_roster(
        self,
        church_id: UUID,
        team_id: UUID,
        member_id: UUID,
        team_role: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            team = await self.uow.volunteer_teams.get_in_church(team_id, church_id)
            if team is None:
                return self._not_found()

            member = await self.uow.members.get_in_church(member_id, church_id)
            if member is None or not member.is_active:
                return Return.err(Error("MEMBER_NOT_FOUND", "Member not found"))

            if any(entry.get("member_id") == str(member_id) for entry in team.roster or []):
                return Return.err(Error("ALREADY_ON_TEAM", "Member is already on this team"))

            team.roster = [
                *(team.roster or []),
                {
                    "member_id": str(member_id),
                    "name": f"{member.first_name} {member.last_name}",
                    "team_role": team_role or "member",
                    "joined_at": utcnow().isoformat(),
                },
            ]
            team.updated_at = utcnow()
            team = await self.uow.volunteer_teams.update(team)
            await self.uow.commit()

            return Return.ok(self._view(team))

    async def remove_from_roster(
        self, church_id: UUID, team_id: UUID, member_id: UUID
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            team = await self.uow.volunteer_teams.get_in_church(team_id, church_id)
            if team is None:
                return self._not_found()

            roster = [e for e in team.roster or [] if e.get("member_id") != str(member_id)]
            if len(roster) == len(team.roster or []):
                return Return.err(Error("NOT_ON_TEAM", "Member is not on this team"))

            team.roster = roster
            if team.leader_member_id == member_id:
                team.leader_member_id = None
            team.updated_at = utcnow()
            team = await self.uow.volunteer_teams.update(team)
            await self.uow.commit()

            return Return.ok(self._view(team))

    async def set_active(self, church_id: UUID, team_id: UUID, active: bool) -> Result[Dict[str, Any]]:
        async with self.uow:
            team = await self.uow.volunteer_teams.get_in_church(team_id, church_id)
            if team is None:
                return self._not_found()

            if team.is_active != active:
                team.is_active = active
                team.updated_at = utcnow()
                team = await self.uow.volunteer_teams.update(team)
                await self.uow.commit()

            return Return.ok(self._view(team))
