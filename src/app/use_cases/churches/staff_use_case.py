"""
Church Staff Use Case

Accounts holding a relationship with a church.
"""

from typing import List
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, ChurchRelationship, ChurchRole
from src.libs.result import Error, Result, Return
from .dtos import AddStaffCommand, StaffMember


class ChurchStaffUseCase:
    """
    Use case for church staff management.

    Business Rules:
    - Staff are existing accounts, found by email
    - The owner's relationship cannot be changed or removed
    - Staff are admins; adding an existing admin is a conflict, adding a
      member or volunteer of the church promotes them
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list_staff(self, church_id: UUID) -> Result[List[StaffMember]]:
        async with self.uow:
            church = await self.uow.churches.get_by_id(church_id)
            if church is None:
                return Return.err(Error("CHURCH_NOT_FOUND", "Church not found"))

            staff = []
            for relationship in await self.uow.church_relationships.list_by_church(church_id):
                account = await self.uow.accounts.get_by_id(relationship.account_id)
                staff.append(
                    StaffMember(
                        account_id=relationship.account_id,
                        first_name=account.first_name if account else None,
                        last_name=account.last_name if account else None,
                        email=account.email if account else None,
                        role=relationship.role.value,
                        is_owner=relationship.account_id == church.owner_id,
                        joined_at=relationship.joined_at,
                    )
                )
            return Return.ok(staff)

    async def add_staff(
        self, church_id: UUID, actor_id: UUID, command: AddStaffCommand
    ) -> Result[StaffMember]:
        async with self.uow:
            church = await self.uow.churches.get_by_id(church_id)
            if church is None:
                return Return.err(Error("CHURCH_NOT_FOUND", "Church not found"))

            account = await self.uow.accounts.get_by_email(command.email)
            if account is None or not account.is_active:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "No active account with this email"))

            if account.id == church.owner_id:
                return Return.err(Error("OWNER_ROLE_FIXED", "The church owner's role cannot be changed"))

            relationship = await self.uow.church_relationships.get(account.id, church_id)
            if relationship is not None and relationship.role == ChurchRole.admin:
                return Return.err(
                    Error("ALREADY_STAFF", "Account already holds this role in the church")
                )

            if relationship is None:
                relationship = await self.uow.church_relationships.create(
                    ChurchRelationship(
                        account_id=account.id, church_id=church_id, role=ChurchRole.admin
                    )
                )
            else:
                relationship.role = ChurchRole.admin
                relationship = await self.uow.church_relationships.update(relationship)

            await self.uow.audit_events.create(
                AuditEvent(
                    church_id=church_id,
                    account_id=actor_id,
                    action="staff_added",
                    event_metadata={"account_id": str(account.id), "role": ChurchRole.admin.value},
                )
            )
            await self.uow.commit()

            return Return.ok(
                StaffMember(
                    account_id=account.id,
                    first_name=account.first_name,
                    last_name=account.last_name,
                    email=account.email,
                    role=relationship.role.value,
                    is_owner=False,
                    joined_at=relationship.joined_at,
                )
            )

    async def remove_staff(self, church_id: UUID, actor_id: UUID, account_id: UUID) -> Result[None]:
        async with self.uow:
            church = await self.uow.churches.get_by_id(church_id)
            if church is None:
                return Return.err(Error("CHURCH_NOT_FOUND", "Church not found"))

            if account_id == church.owner_id:
                return Return.err(Error("OWNER_ROLE_FIXED", "The church owner cannot be removed"))

            relationship = await self.uow.church_relationships.get(account_id, church_id)
            if relationship is None:
                return Return.err(Error("STAFF_NOT_FOUND", "Staff member not found"))

            await self.uow.church_relationships.delete(relationship)
            await self.uow.audit_events.create(
                AuditEvent(
                    church_id=church_id,
                    account_id=actor_id,
                    action="staff_removed",
                    event_metadata={"account_id": str(account_id)},
                )
            )
            await self.uow.commit()
            return Return.ok(None)
