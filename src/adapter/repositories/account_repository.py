from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import col, func, or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.account_repository import IAccountRepository
from src.domain.entities import Account


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email address"""
        stmt = select(Account).where(Account.email == email.lower())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        stmt = select(Account).where(Account.id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, account: Account) -> Account:
        """Create a new account"""
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def update(self, account: Account) -> Account:
        """Update existing account"""
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def list_accounts(
        self,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Account], int]:
        conditions = []
        if role is not None:
            conditions.append(Account.role == role)
        if is_active is not None:
            conditions.append(Account.is_active == is_active)
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    col(Account.first_name).ilike(pattern),
                    col(Account.last_name).ilike(pattern),
                    col(Account.email).ilike(pattern),
                )
            )

        count_stmt = select(func.count()).select_from(Account).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(Account)
            .where(*conditions)
            .order_by(col(Account.created_at).desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total
