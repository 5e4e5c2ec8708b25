"""
Church Stats Use Case

Dashboard counts and per-category breakdowns of donations and expenses.
"""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.app.repositories.church_record_repository import MonthlyTotal
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import MemberRole
from src.libs.result import Result, Return


class ChurchStats(BaseModel):
    active_members: int
    active_volunteers: int
    active_volunteer_teams: int
    total_donations: float
    total_expenses: float
    generated_at: datetime


class MonthlyStat(BaseModel):
    month: str  # YYYY-MM
    total: float
    count: int


class CategoryStat(BaseModel):
    category: str
    total: float
    count: int
    monthly: List[MonthlyStat]


class CategoryBreakdown(BaseModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    total: float
    count: int
    categories: List[CategoryStat]


def breakdown(
    rows: List[MonthlyTotal], start: Optional[datetime], end: Optional[datetime]
) -> CategoryBreakdown:
    """Fold monthly rows into categories, largest total first"""
    categories: Dict[str, CategoryStat] = {}
    for row in rows:
        stat = categories.setdefault(
            row.category, CategoryStat(category=row.category, total=0, count=0, monthly=[])
        )
        stat.total = round(stat.total + row.total, 2)
        stat.count += row.count
        stat.monthly.append(
            MonthlyStat(month=f"{row.year:04d}-{row.month:02d}", total=row.total, count=row.count)
        )

    ordered = sorted(categories.values(), key=lambda stat: (-stat.total, stat.category))
    return CategoryBreakdown(
        start_date=start,
        end_date=end,
        total=round(sum(stat.total for stat in ordered), 2),
        count=sum(stat.count for stat in ordered),
        categories=ordered,
    )


class ChurchStatsUseCase:
    """
    Use case for church statistics.

    Business Rules:
    - Donation figures count completed donations
    - Expense figures count approved and paid expenses, i.e. money the
      church has committed to
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def overview(self, church_id: UUID) -> Result[ChurchStats]:
        async with self.uow:
            members = await self.uow.members.count_in_church(church_id, {"is_active": True})
            volunteers = await self.uow.members.count_in_church(
                church_id, {"is_active": True, "role": MemberRole.volunteer}
            )
            teams = await self.uow.volunteer_teams.count_in_church(church_id, {"is_active": True})
            donations = await self.uow.donations.completed_totals_by_category(church_id)
            expenses = await self.uow.expenses.committed_monthly_totals(church_id)

        return Return.ok(
            ChurchStats(
                active_members=members,
                active_volunteers=volunteers,
                active_volunteer_teams=teams,
                total_donations=round(sum(donations.values()), 2),
                total_expenses=round(sum(row.total for row in expenses), 2),
                generated_at=utcnow(),
            )
        )

    async def donations(
        self, church_id: UUID, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Result[CategoryBreakdown]:
        async with self.uow:
            rows = await self.uow.donations.completed_monthly_totals(church_id, start, end)
        return Return.ok(breakdown(rows, start, end))

    async def expenses(
        self, church_id: UUID, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Result[CategoryBreakdown]:
        async with self.uow:
            rows = await self.uow.expenses.committed_monthly_totals(church_id, start, end)
        return Return.ok(breakdown(rows, start, end))
