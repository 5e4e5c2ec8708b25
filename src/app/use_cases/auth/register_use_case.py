"""
Register Use Case

Creates an account, signs it in and mails the verification link.
"""

from src.api.utils.security import hash_password
from src.app.services.account_mailer import AccountMailer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account, AccountRole, AuditEvent
from src.libs.result import Error, Result, Return
from .account_tokens import issue_verification_token
from .dtos import AccountResponse, AuthResponse, RegisterCommand
from .session_tokens import issue_tokens


class RegisterUseCase:
    """
    Use case for account registration.

    Business Rules:
    - Email must be unique (case-insensitive)
    - The admin role cannot be self-assigned
    - A session is opened immediately
    - The email starts unverified; a verification link is mailed
    """

    def __init__(self, uow: UnitOfWork, mailer: AccountMailer):
        self.uow = uow
        self.mailer = mailer

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        if command.role == AccountRole.admin:
            return Return.err(
                Error("ROLE_NOT_ALLOWED", "The admin role cannot be chosen at registration")
            )

        email = command.email.lower()

        async with self.uow:
            existing = await self.uow.accounts.get_by_email(email)
            if existing is not None:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "An account with this email already exists")
                )

            account = Account(
                first_name=command.first_name,
                last_name=command.last_name,
                email=email,
                phone=command.phone,
                password_hash=hash_password(command.password),
                role=command.role,
            )
            account = await self.uow.accounts.create(account)

            access_token, refresh_token = await issue_tokens(self.uow, account)
            verification_token = await issue_verification_token(self.uow, account)

            await self.uow.audit_events.create(
                AuditEvent(
                    account_id=account.id,
                    action="register",
                    event_metadata={"email": email},
                )
            )
            await self.uow.commit()
            await self.mailer.send_email_verification(account, verification_token)

            return Return.ok(
                AuthResponse(
                    access_token=access_token,
                    refresh_token=refresh_token,
                    account=AccountResponse.from_entity(account),
                )
            )
