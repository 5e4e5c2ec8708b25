"""
List Accounts Use Case
"""

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import AccountResponse
from src.app.use_cases.pagination import Page, PageRequest
from src.libs.result import Result, Return
from .dtos import AccountFilter


class ListAccountsUseCase:
    """Paginated account listing for global admins"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, filters: AccountFilter, page: PageRequest) -> Result[Page[AccountResponse]]:
        async with self.uow:
            accounts, total = await self.uow.accounts.list_accounts(
                role=filters.role,
                is_active=filters.is_active,
                search=filters.search,
                offset=page.offset,
                limit=page.limit,
            )
            items = [AccountResponse.from_entity(account) for account in accounts]

        return Return.ok(Page[AccountResponse].build(items, total, page))
