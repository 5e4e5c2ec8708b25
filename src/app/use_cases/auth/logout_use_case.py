"""
Logout Use Case
"""

from typing import Optional
from uuid import UUID

from src.api.utils.security import hash_refresh_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Result, Return
from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Use case for logout.

    With a refresh token only that session is revoked; without one every
    session of the account is revoked.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID, refresh_token: Optional[str] = None) -> Result[LogoutResponse]:
        async with self.uow:
            if refresh_token:
                session = await self.uow.sessions.find_by_token_hash(
                    hash_refresh_token(refresh_token)
                )
                revoked = 0
                if session is not None and session.account_id == account_id and not session.revoked:
                    session.revoked = True
                    session.revoked_at = utcnow()
                    await self.uow.sessions.update(session)
                    revoked = 1
            else:
                revoked = await self.uow.sessions.revoke_all_by_account_id(account_id)

            await self.uow.commit()
            return Return.ok(LogoutResponse(revoked_sessions=revoked))
