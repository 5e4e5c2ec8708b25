"""
Update and Deactivate Church Use Cases
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent
from src.libs.result import Error, Result, Return
from .dtos import ChurchCommand, ChurchResponse


class UpdateChurchUseCase:
    """
    Use case for editing a church's profile.

    address, contact and pastor are merged key by key.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, church_id: UUID, command: ChurchCommand) -> Result[ChurchResponse]:
        async with self.uow:
            church = await self.uow.churches.get_by_id(church_id)
            if church is None:
                return Return.err(Error("CHURCH_NOT_FOUND", "Church not found"))

            for field in ("name", "description", "denomination"):
                value = getattr(command, field)
                if value is not None:
                    setattr(church, field, value)
            for field in ("address", "contact", "pastor"):
                value = getattr(command, field)
                if value is not None:
                    setattr(church, field, {**(getattr(church, field) or {}), **value})

            church.updated_at = utcnow()
            church = await self.uow.churches.update(church)
            await self.uow.commit()

            return Return.ok(ChurchResponse.from_entity(church, include_private=True, my_role="admin"))


class DeactivateChurchUseCase:
    """Churches are deactivated, never deleted"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, church_id: UUID, actor_id: UUID) -> Result[ChurchResponse]:
        async with self.uow:
            church = await self.uow.churches.get_by_id(church_id)
            if church is None:
                return Return.err(Error("CHURCH_NOT_FOUND", "Church not found"))

            if not church.is_active:
                return Return.err(Error("CHURCH_ALREADY_INACTIVE", "Church is already deactivated"))

            church.is_active = False
            church.updated_at = utcnow()
            church = await self.uow.churches.update(church)
            await self.uow.audit_events.create(
                AuditEvent(church_id=church_id, account_id=actor_id, action="church_deactivated")
            )
            await self.uow.commit()

            return Return.ok(ChurchResponse.from_entity(church, include_private=True, my_role="admin"))
