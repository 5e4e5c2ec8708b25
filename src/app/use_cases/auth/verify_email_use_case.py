"""
Verify Email Use Case
"""

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AccountTokenPurpose, AuditEvent
from src.libs.result import Error, Result, Return
from .account_tokens import redeem_account_token
from .dtos import MessageResponse


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - The token must exist, be unused and unexpired
    - Sets is_email_verified; the token cannot be used again
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[MessageResponse]:
        async with self.uow:
            redeemed = await redeem_account_token(
                self.uow, token, AccountTokenPurpose.email_verification
            )
            if redeemed.is_err():
                return Return.err(redeemed.error)

            account = await self.uow.accounts.get_by_id(redeemed.value.account_id)
            if account is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid or unknown token"))

            account.is_email_verified = True
            await self.uow.accounts.update(account)
            await self.uow.audit_events.create(
                AuditEvent(
                    account_id=account.id,
                    action="email_verified",
                    event_metadata={"email": account.email},
                )
            )
            await self.uow.commit()

            return Return.ok(
                MessageResponse(status="verified", message="Email successfully verified")
            )
