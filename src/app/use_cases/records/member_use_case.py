"""
Member Use Case
"""

from typing import Any, Dict, Optional
from uuid import UUID

from src.domain.entities import Member
from src.libs.result import Error
from .church_record_use_case import ChurchRecordUseCase


class MemberUseCase(ChurchRecordUseCase):
    """
    Church members.

    Business Rules:
    - An account can be linked to at most one member record per church
    - Email, when given, is unique within the church
    - Deleting a member takes them off every team roster of the church
    """

    collection = "members"
    model = Member
    not_found_code = "MEMBER_NOT_FOUND"
    label = "Member"

    async def _validate(
        self, church_id: UUID, values: Dict[str, Any], record: Optional[Member] = None
    ) -> Optional[Error]:
        own_id = record.id if record is not None else None

        account_id = values.get("account_id")
        if account_id is not None:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Error("ACCOUNT_NOT_FOUND", "Linked account not found")
            linked, _ = await self.uow.members.list_in_church(
                church_id, filters={"account_id": account_id}
            )
            if any(member.id != own_id for member in linked):
                return Error("MEMBER_EXISTS", "This account is already a member of the church")

        email = values.get("email")
        if email:
            values["email"] = email.lower()
            same_email, _ = await self.uow.members.list_in_church(
                church_id, filters={"email": values["email"]}
            )
            if any(member.id != own_id for member in same_email):
                return Error("MEMBER_EXISTS", "A member with this email already exists")

        return None

    async def _before_delete(self, record: Member) -> Optional[Error]:
        teams, _ = await self.uow.volunteer_teams.list_in_church(record.church_id)
        member_id = str(record.id)
        for team in teams:
            roster = [entry for entry in team.roster or [] if entry.get("member_id") != member_id]
            leader_removed = team.leader_member_id == record.id
            if len(roster) != len(team.roster or []) or leader_removed:
                team.roster = roster
                if leader_removed:
                    team.leader_member_id = None
                await self.uow.volunteer_teams.update(team)
        return None
