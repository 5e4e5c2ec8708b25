"""
List Churches Use Cases
"""

from typing import List, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.pagination import Page, PageRequest
from src.libs.result import Result, Return
from .dtos import ChurchResponse


class ListChurchesUseCase:
    """Public directory of active churches"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        page: PageRequest,
        search: Optional[str] = None,
        denomination: Optional[str] = None,
    ) -> Result[Page[ChurchResponse]]:
        async with self.uow:
            churches, total = await self.uow.churches.list_active(
                search=search,
                denomination=denomination,
                offset=page.offset,
                limit=page.limit,
            )
            items = [ChurchResponse.from_entity(church) for church in churches]

        return Return.ok(Page[ChurchResponse].build(items, total, page))


class ListMyChurchesUseCase:
    """Churches the account holds a relationship with, and its role in each"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[List[ChurchResponse]]:
        async with self.uow:
            relationships = await self.uow.church_relationships.list_by_account(account_id)
            roles = {r.church_id: r.role.value for r in relationships}
            churches = await self.uow.churches.get_by_ids(list(roles))

            return Return.ok(
                [
                    ChurchResponse.from_entity(
                        church,
                        include_private=roles[church.id] == "admin",
                        my_role=roles[church.id],
                    )
                    for church in sorted(churches, key=lambda c: c.name)
                ]
            )
