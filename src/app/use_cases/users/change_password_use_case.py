"""
Change Password Use Case
"""

from uuid import UUID

from src.api.utils.security import hash_password, verify_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.libs.result import Error, Result, Return
from .dtos import PasswordChangedResponse


class ChangePasswordUseCase:
    """
    Use case for changing the signed-in account's password.

    Business Rules:
    - The current password must match
    - The new password must differ from the current one
    - Every session is revoked; the client signs in again
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, account_id: UUID, current_password: str, new_password: str
    ) -> Result[PasswordChangedResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

            if not verify_password(current_password, account.password_hash):
                return Return.err(
                    Error("INVALID_PASSWORD", "Current password is incorrect")
                )

            if current_password == new_password:
                return Return.err(
                    Error("PASSWORD_UNCHANGED", "New password must differ from the current one")
                )

            account.password_hash = hash_password(new_password)
            await self.uow.accounts.update(account)
            revoked = await self.uow.sessions.revoke_all_by_account_id(account_id)

            await self.uow.audit_events.create(
                AuditEvent(account_id=account_id, action="password_changed")
            )
            await self.uow.commit()

            return Return.ok(
                PasswordChangedResponse(
                    message="Password changed successfully", revoked_sessions=revoked
                )
            )
