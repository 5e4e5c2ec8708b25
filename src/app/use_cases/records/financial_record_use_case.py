"""
Manual Financial Record Use Case

Hand-entered income and expenses, and the church's financial summary.
"""

from collections import defaultdict
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import (
    FinancialRecordStatus,
    FinancialRecordType,
    ManualFinancialRecord,
)
from src.domain.lifecycle import FINANCIAL_RECORD_TRANSITIONS
from src.libs.result import Error, Result, Return
from .church_record_use_case import ChurchRecordUseCase


class FinancialSummary(BaseModel):
    """Reconciled totals for a church over an optional date range"""

    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    total_income: float
    total_expenses: float
    net: float
    income_by_source: Dict[str, float]
    expenses_by_category: Dict[str, float]
    pending_records: int


def _merge(*totals: Dict[str, float]) -> Dict[str, float]:
    merged = defaultdict(float)
    for part in totals:
        for category, amount in part.items():
            merged[category] += amount
    return {category: round(amount, 2) for category, amount in merged.items()}


class FinancialRecordUseCase(ChurchRecordUseCase):
    """
    Manual financial records.

    Business Rules:
    - Lifecycle: pending -> verified | rejected
    - Only pending records can be edited or deleted
    - The summary counts completed donations, paid expenses and verified
      manual records
    """

    collection = "financial_records"
    model = ManualFinancialRecord
    not_found_code = "FINANCIAL_RECORD_NOT_FOUND"
    label = "Financial record"
    transitions = FINANCIAL_RECORD_TRANSITIONS

    async def _validate(
        self,
        church_id: UUID,
        values: Dict[str, Any],
        record: Optional[ManualFinancialRecord] = None,
    ) -> Optional[Error]:
        if record is not None and record.status != FinancialRecordStatus.pending:
            return Error("RECORD_LOCKED", "Only pending records can be edited")
        return None

    async def _before_delete(self, record: ManualFinancialRecord) -> Optional[Error]:
        if record.status != FinancialRecordStatus.pending:
            return Error("RECORD_LOCKED", "Only pending records can be deleted")
        return None

    async def summary(
        self,
        church_id: UUID,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Result[FinancialSummary]:
        async with self.uow:
            donations = await self.uow.donations.completed_totals_by_category(
                church_id, start_date, end_date
            )
            expenses = await self.uow.expenses.paid_totals_by_category(church_id, start_date, end_date)
            manual_income = await self.uow.financial_records.verified_totals_by_category(
                church_id, FinancialRecordType.income, start_date, end_date
            )
            manual_expenses = await self.uow.financial_records.verified_totals_by_category(
                church_id, FinancialRecordType.expense, start_date, end_date
            )
            pending = await self.uow.financial_records.count_pending(church_id, start_date, end_date)

        income = _merge({"donations": sum(donations.values())} if donations else {}, manual_income)
        expenses = _merge(expenses, manual_expenses)

        total_income = round(sum(income.values()), 2)
        total_expenses = round(sum(expenses.values()), 2)
        return Return.ok(
            FinancialSummary(
                start_date=start_date,
                end_date=end_date,
                total_income=total_income,
                total_expenses=total_expenses,
                net=round(total_income - total_expenses, 2),
                income_by_source=income,
                expenses_by_category=expenses,
                pending_records=pending,
            )
        )
