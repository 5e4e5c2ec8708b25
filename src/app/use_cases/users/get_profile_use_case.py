"""
Get Profile Use Case
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import AccountResponse, ChurchMembershipInfo
from src.libs.result import Error, Result, Return


class GetProfileUseCase:
    """Account profile with the churches it is related to"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[AccountResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

            relationships = await self.uow.church_relationships.list_by_account(account_id)
            churches = await self.uow.churches.get_by_ids(
                [r.church_id for r in relationships]
            )
            names = {church.id: church.name for church in churches}

            return Return.ok(
                AccountResponse.from_entity(
                    account,
                    [
                        ChurchMembershipInfo(
                            church_id=r.church_id,
                            name=names.get(r.church_id),
                            role=r.role.value,
                        )
                        for r in relationships
                    ],
                )
            )
