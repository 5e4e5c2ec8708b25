"""
Refresh Token Use Case

Rotates a refresh token and issues a new access token.
"""

from src.api.utils.security import hash_refresh_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Error, Result, Return
from .dtos import RefreshTokenResponse
from .session_tokens import issue_tokens


class RefreshTokenUseCase:
    """
    Use case for refresh token rotation.

    Business Rules:
    - Session must exist, not be revoked and not be expired
    - Account must still be active
    - The used session is revoked and replaced (rotation)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        async with self.uow:
            session = await self.uow.sessions.find_by_token_hash(
                hash_refresh_token(refresh_token)
            )
            if session is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid refresh token"))

            if session.revoked:
                return Return.err(Error("SESSION_REVOKED", "Session has been revoked"))

            now = utcnow()
            if session.expires_at < now:
                return Return.err(Error("SESSION_EXPIRED", "Session has expired"))

            account = await self.uow.accounts.get_by_id(session.account_id)
            if account is None or not account.is_active:
                return Return.err(Error("ACCOUNT_DISABLED", "Account is deactivated"))

            session.revoked = True
            session.revoked_at = now
            await self.uow.sessions.update(session)

            access_token, new_refresh_token = await issue_tokens(self.uow, account)
            await self.uow.commit()

            return Return.ok(
                RefreshTokenResponse(
                    access_token=access_token, refresh_token=new_refresh_token
                )
            )
