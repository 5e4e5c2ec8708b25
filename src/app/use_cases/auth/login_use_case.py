"""
Login Use Case

Handles account authentication and returns JWT tokens.
"""

from src.api.utils.security import burn_password_check, verify_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent
from src.libs.result import Error, Result, Return
from .dtos import AccountResponse, AuthResponse
from .session_tokens import issue_tokens


class LoginUseCase:
    """
    Use case for login and JWT issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Account must be active
    - Creates new session with refresh token
    - Updates account.last_login_at
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, password: str) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: Account email
            password: Plain text password

        Returns:
            Result with AuthResponse containing tokens and profile, or Error
        """
        async with self.uow:
            account = await self.uow.accounts.get_by_email(email.lower())

            # Always perform a hash check even if the account is not found
            if account is None:
                burn_password_check()
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not verify_password(password, account.password_hash):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not account.is_active:
                return Return.err(Error("ACCOUNT_DISABLED", "Account is deactivated"))

            access_token, refresh_token = await issue_tokens(self.uow, account)

            account.last_login_at = utcnow()
            account = await self.uow.accounts.update(account)

            await self.uow.audit_events.create(
                AuditEvent(
                    account_id=account.id,
                    action="login",
                    event_metadata={"email": account.email},
                )
            )
            await self.uow.commit()

            return Return.ok(
                AuthResponse(
                    access_token=access_token,
                    refresh_token=refresh_token,
                    account=AccountResponse.from_entity(account),
                )
            )
