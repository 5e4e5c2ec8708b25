"""
Request Password Reset Use Case

Mails a one-time password reset link.
"""

from datetime import timedelta

from config import ApplicationConfig
from src.app.services.account_mailer import AccountMailer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AccountTokenPurpose, AuditEvent
from src.libs.result import Result, Return
from .account_tokens import issue_account_token
from .dtos import MessageResponse

RESET_REQUESTED = "If the email exists, a password reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - No email enumeration: unknown and deactivated accounts get the same
      response, and no token
    - Tokens expire after PASSWORD_RESET_EXPIRE_MINUTES
    - A new request invalidates earlier reset tokens
    """

    def __init__(self, uow: UnitOfWork, mailer: AccountMailer):
        self.uow = uow
        self.mailer = mailer

    async def execute(self, email: str) -> Result[MessageResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_email(email.lower())
            if account is None or not account.is_active:
                return Return.ok(MessageResponse(status="sent", message=RESET_REQUESTED))

            token = await issue_account_token(
                self.uow,
                account,
                AccountTokenPurpose.password_reset,
                timedelta(minutes=ApplicationConfig.PASSWORD_RESET_EXPIRE_MINUTES),
            )
            await self.uow.audit_events.create(
                AuditEvent(account_id=account.id, action="password_reset_requested")
            )
            await self.uow.commit()
            await self.mailer.send_password_reset(account, token)

        return Return.ok(MessageResponse(status="sent", message=RESET_REQUESTED))
