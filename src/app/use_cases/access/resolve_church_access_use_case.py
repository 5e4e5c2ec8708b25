"""
Resolve Church Access Use Case

Decides whether an account may act inside a church, and with which role.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ChurchRole
from src.libs.result import Error, Result, Return
from .dtos import ChurchAccess


class ResolveChurchAccessUseCase:
    """
    Use case for the tenant access check.

    Business Rules:
    - An admin relationship to the church grants role "admin"
    - Otherwise an active Member record linked to the account grants the
      member's role
    - Anything else is denied
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID, church_id: Optional[str]) -> Result[ChurchAccess]:
        if not church_id:
            return Return.err(Error("CHURCH_ID_REQUIRED", "Church ID is required"))

        try:
            church_uuid = UUID(str(church_id))
        except ValueError:
            return Return.err(Error("INVALID_CHURCH_ID", "Church ID is not valid"))

        async with self.uow:
            try:
                relationship = await self.uow.church_relationships.get(
                    account_id, church_uuid
                )
                if relationship is not None and relationship.role == ChurchRole.admin:
                    return Return.ok(
                        ChurchAccess(church_id=church_uuid, role=ChurchRole.admin.value)
                    )

                member = await self.uow.members.get_active_by_account(
                    account_id, church_uuid
                )
            except SQLAlchemyError:
                return Return.err(
                    Error("CHURCH_ACCESS_LOOKUP_FAILED", "Error checking church access")
                )

            if member is not None:
                return Return.ok(ChurchAccess(church_id=church_uuid, role=member.role.value))

            return Return.err(
                Error("CHURCH_ACCESS_DENIED", "Not authorized to access this church")
            )
