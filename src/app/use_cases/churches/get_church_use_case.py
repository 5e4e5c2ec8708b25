"""
Get Church Use Case
"""

from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ChurchRole
from src.libs.result import Error, Result, Return
from .dtos import ChurchResponse


class GetChurchUseCase:
    """
    Use case for viewing one church, signed in or not.

    Business Rules:
    - Inactive churches are only visible to their admins
    - settings and financial are only shown to admins
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, church_id: UUID, viewer_id: Optional[UUID] = None) -> Result[ChurchResponse]:
        async with self.uow:
            church = await self.uow.churches.get_by_id(church_id)
            if church is None:
                return Return.err(Error("CHURCH_NOT_FOUND", "Church not found"))

            my_role = None
            if viewer_id is not None:
                relationship = await self.uow.church_relationships.get(viewer_id, church_id)
                if relationship is not None:
                    my_role = relationship.role.value
                else:
                    member = await self.uow.members.get_active_by_account(viewer_id, church_id)
                    my_role = member.role.value if member is not None else None

            is_admin = my_role == ChurchRole.admin.value
            if not church.is_active and not is_admin:
                return Return.err(Error("CHURCH_NOT_FOUND", "Church not found"))

            return Return.ok(
                ChurchResponse.from_entity(church, include_private=is_admin, my_role=my_role)
            )
