"""
Update Profile Use Case
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import AccountResponse
from src.libs.result import Error, Result, Return
from .dtos import UpdateProfileCommand


class UpdateProfileUseCase:
    """
    Use case for updating the signed-in account.

    Business Rules:
    - Email, role and active flag are not editable here
    - Preferences are merged one level deep
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID, command: UpdateProfileCommand) -> Result[AccountResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

            if command.first_name is not None:
                account.first_name = command.first_name
            if command.last_name is not None:
                account.last_name = command.last_name
            if command.phone is not None:
                account.phone = command.phone
            if command.preferences:
                merged = dict(account.preferences or {})
                for key, value in command.preferences.items():
                    if isinstance(value, dict) and isinstance(merged.get(key), dict):
                        merged[key] = {**merged[key], **value}
                    else:
                        merged[key] = value
                account.preferences = merged

            account = await self.uow.accounts.update(account)
            await self.uow.commit()

            return Return.ok(AccountResponse.from_entity(account))
