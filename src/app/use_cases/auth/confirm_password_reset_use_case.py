"""
Confirm Password Reset Use Case

Sets a new password from a mailed reset token.
"""

from src.api.utils.security import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AccountTokenPurpose, AuditEvent
from src.libs.result import Error, Result, Return
from .account_tokens import redeem_account_token
from .dtos import MessageResponse


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - The token must exist, be unused and unexpired
    - The token is single-use
    - Every session of the account is revoked
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str, new_password: str) -> Result[MessageResponse]:
        async with self.uow:
            redeemed = await redeem_account_token(
                self.uow, token, AccountTokenPurpose.password_reset
            )
            if redeemed.is_err():
                return Return.err(redeemed.error)

            account = await self.uow.accounts.get_by_id(redeemed.value.account_id)
            if account is None or not account.is_active:
                return Return.err(Error("INVALID_TOKEN", "Invalid or unknown token"))

            account.password_hash = hash_password(new_password)
            await self.uow.accounts.update(account)
            revoked = await self.uow.sessions.revoke_all_by_account_id(account.id)

            await self.uow.audit_events.create(
                AuditEvent(
                    account_id=account.id,
                    action="password_reset_confirmed",
                    event_metadata={"sessions_revoked": revoked},
                )
            )
            await self.uow.commit()

            return Return.ok(
                MessageResponse(status="success", message="Password has been reset successfully")
            )
