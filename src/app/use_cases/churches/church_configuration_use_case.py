"""
Church Configuration Use Case

Services, donation categories, settings and financial configuration are
embedded in the church row.
"""

import uuid
from typing import Any, Dict
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Error, Result, Return
from .dtos import ChurchResponse, DonationCategoryCommand, ServiceCommand


class ChurchConfigurationUseCase:
    """
    Use case for the church's embedded configuration.

    Business Rules:
    - Embedded services and categories get their own ids
    - Donation category names are unique per church (case-insensitive)
    - settings and financial are merged key by key
    - Updating an embedded entry changes only the given fields; its id is kept
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def add_service(self, church_id: UUID, command: ServiceCommand) -> Result[ChurchResponse]:
        entry = {"id": str(uuid.uuid4()), **command.model_dump()}
        return await self._mutate(church_id, lambda church: self._append(church, "services", entry))

    async def update_service(
        self, church_id: UUID, service_id: str, values: Dict[str, Any]
    ) -> Result[ChurchResponse]:
        return await self._mutate(
            church_id,
            lambda church: self._replace(church, "services", service_id, values, "SERVICE_NOT_FOUND"),
        )

    async def remove_service(self, church_id: UUID, service_id: str) -> Result[ChurchResponse]:
        return await self._mutate(
            church_id, lambda church: self._remove(church, "services", service_id, "SERVICE_NOT_FOUND")
        )

    async def add_donation_category(
        self, church_id: UUID, command: DonationCategoryCommand
    ) -> Result[ChurchResponse]:
        def apply(church):
            names = {c.get("name", "").lower() for c in church.donation_categories or []}
            if command.name.lower() in names:
                return Error("CATEGORY_EXISTS", "Donation category already exists")
            entry = {"id": str(uuid.uuid4()), "is_active": True, **command.model_dump()}
            return self._append(church, "donation_categories", entry)

        return await self._mutate(church_id, apply)

    async def update_donation_category(
        self, church_id: UUID, category_id: str, values: Dict[str, Any]
    ) -> Result[ChurchResponse]:
        def apply(church):
            name = values.get("name")
            if name is not None:
                taken = {
                    c.get("name", "").lower()
                    for c in church.donation_categories or []
                    if c.get("id") != category_id
                }
                if name.lower() in taken:
                    return Error("CATEGORY_EXISTS", "Donation category already exists")
            return self._replace(
                church, "donation_categories", category_id, values, "CATEGORY_NOT_FOUND"
            )

        return await self._mutate(church_id, apply)

    async def remove_donation_category(self, church_id: UUID, category_id: str) -> Result[ChurchResponse]:
        return await self._mutate(
            church_id,
            lambda church: self._remove(
                church, "donation_categories", category_id, "CATEGORY_NOT_FOUND"
            ),
        )

    async def update_settings(self, church_id: UUID, values: Dict[str, Any]) -> Result[ChurchResponse]:
        return await self._mutate(church_id, lambda church: self._merge(church, "settings", values))

    async def update_financial(self, church_id: UUID, values: Dict[str, Any]) -> Result[ChurchResponse]:
        return await self._mutate(church_id, lambda church: self._merge(church, "financial", values))

    @staticmethod
    def _append(church, field: str, entry: Dict[str, Any]):
        setattr(church, field, [*(getattr(church, field) or []), entry])

    @staticmethod
    def _remove(church, field: str, entry_id: str, missing_code: str):
        entries = getattr(church, field) or []
        kept = [entry for entry in entries if entry.get("id") != entry_id]
        if len(kept) == len(entries):
            return Error(missing_code, "Entry not found")
        setattr(church, field, kept)

    @staticmethod
    def _replace(church, field: str, entry_id: str, values: Dict[str, Any], missing_code: str):
        entries = list(getattr(church, field) or [])
        index = next((i for i, entry in enumerate(entries) if entry.get("id") == entry_id), None)
        if index is None:
            return Error(missing_code, "Entry not found")
        entries[index] = {**entries[index], **values}
        setattr(church, field, entries)

    @staticmethod
    def _merge(church, field: str, values: Dict[str, Any]):
        setattr(church, field, {**(getattr(church, field) or {}), **values})

    async def _mutate(self, church_id: UUID, apply) -> Result[ChurchResponse]:
        async with self.uow:
            church = await self.uow.churches.get_by_id(church_id)
            if church is None:
                return Return.err(Error("CHURCH_NOT_FOUND", "Church not found"))

            error = apply(church)
            if error is not None:
                return Return.err(error)

            church.updated_at = utcnow()
            church = await self.uow.churches.update(church)
            await self.uow.commit()

            return Return.ok(ChurchResponse.from_entity(church, include_private=True, my_role="admin"))
