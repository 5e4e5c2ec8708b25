from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar
from uuid import UUID

from sqlalchemy import extract
from sqlmodel import col, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.church_record_repository import (
    IDonationRepository,
    IExpenseRepository,
    IFinancialRecordRepository,
    MonthlyTotal,
)
from src.domain.entities import (
    ChurchRecord,
    Donation,
    DonationStatus,
    Expense,
    ExpenseStatus,
    FinancialRecordStatus,
    FinancialRecordType,
    ManualFinancialRecord,
)

T = TypeVar("T", bound=ChurchRecord)


class ChurchScopedRepository(Generic[T]):
    """
    SQLModel implementation shared by all church-scoped repositories.

    Subclasses set `model` to their table class.
    """

    model: Type[T]

    def __init__(self, session: AsyncSession):
        self.session = session

    def _conditions(self, church_id: UUID, filters: Optional[Dict[str, Any]]) -> list:
        conditions = [self.model.church_id == church_id]
        for name, value in (filters or {}).items():
            if value is not None:
                conditions.append(getattr(self.model, name) == value)
        return conditions

    async def get_in_church(self, record_id: UUID, church_id: UUID) -> Optional[T]:
        stmt = select(self.model).where(
            self.model.id == record_id, self.model.church_id == church_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_in_church(
        self,
        church_id: UUID,
        filters: Optional[Dict[str, Any]] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[List[T], int]:
        conditions = self._conditions(church_id, filters)

        count_stmt = select(func.count()).select_from(self.model).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(self.model)
            .where(*conditions)
            .order_by(col(self.model.created_at).desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def count_in_church(self, church_id: UUID, filters: Optional[Dict[str, Any]] = None) -> int:
        stmt = select(func.count()).select_from(self.model).where(*self._conditions(church_id, filters))
        return (await self.session.exec(stmt)).one()

    async def create(self, record: T) -> T:
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def update(self, record: T) -> T:
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def delete(self, record: T) -> None:
        await self.session.delete(record)
        await self.session.flush()

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    @staticmethod
    def _between(moment, start: Optional[datetime], end: Optional[datetime]) -> list:
        conditions = []
        if start is not None:
            conditions.append(moment >= start)
        if end is not None:
            conditions.append(moment <= end)
        return conditions

    async def _totals_by(self, key, amount, conditions: list) -> Dict[str, float]:
        stmt = select(key, func.sum(amount)).where(*conditions).group_by(key)
        rows = (await self.session.exec(stmt)).all()
        return {category: round(float(total or 0), 2) for category, total in rows}

    async def _monthly_totals_by(self, key, amount, moment, conditions: list) -> List[MonthlyTotal]:
        year = extract("year", moment)
        month = extract("month", moment)
        stmt = (
            select(key, year, month, func.sum(amount), func.count())
            .where(*conditions)
            .group_by(key, year, month)
            .order_by(year, month)
        )
        rows = (await self.session.exec(stmt)).all()
        return [
            MonthlyTotal(category, int(y), int(m), round(float(total or 0), 2), count)
            for category, y, m, total, count in rows
        ]


class DonationRepository(ChurchScopedRepository[Donation], IDonationRepository):
    model = Donation

    def _completed(self, church_id: UUID, start, end) -> list:
        return [
            Donation.church_id == church_id,
            Donation.status == DonationStatus.completed,
            *self._between(col(Donation.created_at), start, end),
        ]

    @staticmethod
    def _category():
        return func.coalesce(Donation.category, "general")

    async def completed_totals_by_category(
        self, church_id: UUID, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Dict[str, float]:
        return await self._totals_by(
            self._category(), Donation.amount, self._completed(church_id, start, end)
        )

    async def completed_monthly_totals(
        self, church_id: UUID, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[MonthlyTotal]:
        return await self._monthly_totals_by(
            self._category(),
            Donation.amount,
            col(Donation.created_at),
            self._completed(church_id, start, end),
        )


class ExpenseRepository(ChurchScopedRepository[Expense], IExpenseRepository):
    model = Expense

    @staticmethod
    def _amount():
        return func.coalesce(Expense.approved_amount, Expense.amount)

    async def paid_totals_by_category(
        self, church_id: UUID, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Dict[str, float]:
        conditions = [
            Expense.church_id == church_id,
            Expense.status == ExpenseStatus.paid,
            *self._between(col(Expense.paid_at), start, end),
        ]
        return await self._totals_by(col(Expense.category), self._amount(), conditions)

    async def committed_monthly_totals(
        self, church_id: UUID, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[MonthlyTotal]:
        conditions = [
            Expense.church_id == church_id,
            col(Expense.status).in_([ExpenseStatus.approved, ExpenseStatus.paid]),
            *self._between(col(Expense.created_at), start, end),
        ]
        return await self._monthly_totals_by(
            col(Expense.category), self._amount(), col(Expense.created_at), conditions
        )


class FinancialRecordRepository(
    ChurchScopedRepository[ManualFinancialRecord], IFinancialRecordRepository
):
    model = ManualFinancialRecord

    async def verified_totals_by_category(
        self,
        church_id: UUID,
        record_type: FinancialRecordType,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Dict[str, float]:
        conditions = [
            ManualFinancialRecord.church_id == church_id,
            ManualFinancialRecord.record_type == record_type,
            ManualFinancialRecord.status == FinancialRecordStatus.verified,
            *self._between(col(ManualFinancialRecord.record_date), start, end),
        ]
        return await self._totals_by(
            col(ManualFinancialRecord.category), ManualFinancialRecord.amount, conditions
        )

    async def count_pending(
        self, church_id: UUID, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(ManualFinancialRecord)
            .where(
                ManualFinancialRecord.church_id == church_id,
                ManualFinancialRecord.status == FinancialRecordStatus.pending,
                *self._between(col(ManualFinancialRecord.record_date), start, end),
            )
        )
        return (await self.session.exec(stmt)).one()
