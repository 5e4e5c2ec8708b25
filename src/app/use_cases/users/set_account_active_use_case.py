"""
Set Account Active Use Case

Activates or deactivates an account (global admins only).
"""

from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import AccountResponse
from src.domain.entities import AuditEvent
from src.libs.result import Error, Result, Return


class SetAccountActiveUseCase:
    """
    Use case for account activation and deactivation.

    Business Rules:
    - An admin cannot deactivate their own account
    - Deactivation revokes every session of the account
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        account_id: UUID,
        is_active: bool,
        reason: Optional[str] = None,
    ) -> Result[AccountResponse]:
        if not is_active and actor_id == account_id:
            return Return.err(
                Error("CANNOT_DEACTIVATE_SELF", "You cannot deactivate your own account")
            )

        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

            account.is_active = is_active
            account = await self.uow.accounts.update(account)

            if not is_active:
                await self.uow.sessions.revoke_all_by_account_id(account_id)

            await self.uow.audit_events.create(
                AuditEvent(
                    account_id=account_id,
                    action="account_activated" if is_active else "account_deactivated",
                    event_metadata={"by": str(actor_id), "reason": reason},
                )
            )
            await self.uow.commit()

            return Return.ok(AccountResponse.from_entity(account))
