from typing import Optional
from uuid import UUID

from sqlmodel import col, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.account_token_repository import IAccountTokenRepository
from src.domain.base import utcnow
from src.domain.entities import AccountToken, AccountTokenPurpose


class AccountTokenRepository(IAccountTokenRepository):
    """AccountToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: AccountToken) -> AccountToken:
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_hash(
        self, token_hash: str, purpose: AccountTokenPurpose
    ) -> Optional[AccountToken]:
        stmt = select(AccountToken).where(
            AccountToken.token_hash == token_hash, AccountToken.purpose == purpose
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def update(self, token: AccountToken) -> AccountToken:
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def invalidate_outstanding(self, account_id: UUID, purpose: AccountTokenPurpose) -> int:
        stmt = (
            update(AccountToken)
            .where(
                AccountToken.account_id == account_id,
                AccountToken.purpose == purpose,
                col(AccountToken.used_at).is_(None),
            )
            .values(used_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
