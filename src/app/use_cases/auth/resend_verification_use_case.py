"""
Resend Verification Email Use Case
"""

from src.app.services.account_mailer import AccountMailer
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .account_tokens import issue_verification_token
from .dtos import MessageResponse

VERIFICATION_SENT = "If the email exists, a verification link has been sent"


class ResendVerificationUseCase:
    """
    Use case for resending the verification email.

    Business Rules:
    - No email enumeration: unknown emails get the "sent" response
    - Already verified accounts get no mail
    - The new token replaces any earlier one
    """

    def __init__(self, uow: UnitOfWork, mailer: AccountMailer):
        self.uow = uow
        self.mailer = mailer

    async def execute(self, email: str) -> Result[MessageResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_email(email.lower())
            if account is None or not account.is_active:
                return Return.ok(MessageResponse(status="sent", message=VERIFICATION_SENT))

            if account.is_email_verified:
                return Return.ok(
                    MessageResponse(status="already_verified", message="Email is already verified")
                )

            token = await issue_verification_token(self.uow, account)
            await self.uow.commit()
            await self.mailer.send_email_verification(account, token)

        return Return.ok(MessageResponse(status="sent", message=VERIFICATION_SENT))
