"""
Create Church Use Case
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, Church, ChurchRelationship, ChurchRole
from src.libs.result import Error, Result, Return
from .dtos import ChurchCommand, ChurchResponse


class CreateChurchUseCase:
    """
    Use case for creating a church.

    Business Rules:
    - The creating account becomes owner and holds an admin relationship
    - Plan limits are enforced by the entitlement gate before this runs
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, owner_id: UUID, command: ChurchCommand) -> Result[ChurchResponse]:
        if not command.name:
            return Return.err(Error("NAME_REQUIRED", "Church name is required"))

        async with self.uow:
            church = Church(
                name=command.name,
                description=command.description,
                denomination=command.denomination,
                owner_id=owner_id,
                address=command.address or {},
                contact=command.contact or {},
                pastor=command.pastor or {},
            )
            church = await self.uow.churches.create(church)

            await self.uow.church_relationships.create(
                ChurchRelationship(
                    account_id=owner_id, church_id=church.id, role=ChurchRole.admin
                )
            )
            await self.uow.audit_events.create(
                AuditEvent(
                    church_id=church.id,
                    account_id=owner_id,
                    action="church_created",
                    event_metadata={"name": church.name},
                )
            )
            await self.uow.commit()

            return Return.ok(
                ChurchResponse.from_entity(
                    church, include_private=True, my_role=ChurchRole.admin.value
                )
            )
