"""
Load Church Resource Use Case

Fetches a church-scoped record by id, bound to the resolved church.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return

# Collections that can be bound to a church, by UnitOfWork attribute
CHURCH_COLLECTIONS = (
    "members",
    "volunteer_teams",
    "campaigns",
    "donations",
    "expenses",
    "financial_records",
)


class LoadChurchResourceUseCase:
    """
    Use case for the resource ownership check.

    Business Rules:
    - The lookup is always scoped by church id
    - A record of another church is reported exactly like a missing one
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        collection: str,
        resource_id: Optional[str],
        church_id: Optional[UUID],
    ) -> Result[Dict[str, Any]]:
        if church_id is None:
            return Return.err(Error("CHURCH_ACCESS_NOT_VERIFIED", "Church access not verified"))

        if collection not in CHURCH_COLLECTIONS:
            raise ValueError(f"Unknown church collection: {collection}")

        try:
            resource_uuid = UUID(str(resource_id))
        except ValueError:
            return Return.err(Error("INVALID_RESOURCE_ID", "Resource ID is not valid"))

        async with self.uow:
            repository = getattr(self.uow, collection)
            try:
                record = await repository.get_in_church(resource_uuid, church_id)
            except SQLAlchemyError:
                return Return.err(
                    Error("RESOURCE_LOOKUP_FAILED", "Error checking resource access")
                )

            if record is None:
                return Return.err(Error("RESOURCE_NOT_FOUND", "Resource not found"))

            return Return.ok(record.model_dump(mode="json"))
