from typing import Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.base import utcnow
from src.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def update(self, session_obj: Session) -> Session:
        """Update existing session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def find_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """
        Find session by refresh token digest.

        Revoked and expired sessions are returned too; the use case checks
        them so it can report the precise error.
        """
        stmt = select(Session).where(Session.refresh_token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def revoke_all_by_account_id(self, account_id: UUID) -> int:
        """Revoke all active sessions for an account"""
        stmt = (
            update(Session)
            .where(Session.account_id == account_id, Session.revoked == False)  # noqa: E712
            .values(revoked=True, revoked_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
