from datetime import datetime
from uuid import uuid4

import pytest

from src.app.use_cases.records import FinancialRecordUseCase
from src.domain.entities import FinancialRecordType


@pytest.fixture
def totals(mock_uow):
    mock_uow.donations.completed_totals_by_category.return_value = {"general": 1500.0, "tithe": 500.0}
    mock_uow.expenses.paid_totals_by_category.return_value = {"maintenance": 450.0}

    async def verified(church_id, record_type, start=None, end=None):
        if record_type == FinancialRecordType.income:
            return {"offering": 1000.0}
        return {"maintenance": 50.0, "utilities": 120.25}

    mock_uow.financial_records.verified_totals_by_category.side_effect = verified
    mock_uow.financial_records.count_pending.return_value = 3
    return mock_uow


@pytest.mark.asyncio
async def test_summary_merges_database_totals(totals):
    result = await FinancialRecordUseCase(totals).summary(uuid4())

    assert result.is_ok()
    summary = result.value
    assert summary.income_by_source == {"donations": 2000.0, "offering": 1000.0}
    assert summary.expenses_by_category == {"maintenance": 500.0, "utilities": 120.25}
    assert summary.total_income == 3000.0
    assert summary.total_expenses == 620.25
    assert summary.net == 2379.75
    assert summary.pending_records == 3


@pytest.mark.asyncio
async def test_summary_passes_period_to_every_query(totals):
    church_id = uuid4()
    start, end = datetime(2024, 1, 1), datetime(2024, 3, 31)

    await FinancialRecordUseCase(totals).summary(church_id, start, end)

    totals.donations.completed_totals_by_category.assert_awaited_once_with(church_id, start, end)
    totals.expenses.paid_totals_by_category.assert_awaited_once_with(church_id, start, end)
    totals.financial_records.count_pending.assert_awaited_once_with(church_id, start, end)
    assert totals.financial_records.verified_totals_by_category.await_count == 2


@pytest.mark.asyncio
async def test_summary_without_donations_has_no_donation_source(mock_uow):
    mock_uow.donations.completed_totals_by_category.return_value = {}
    mock_uow.expenses.paid_totals_by_category.return_value = {}
    mock_uow.financial_records.verified_totals_by_category.return_value = {}
    mock_uow.financial_records.count_pending.return_value = 0

    result = await FinancialRecordUseCase(mock_uow).summary(uuid4())

    assert result.value.income_by_source == {}
    assert result.value.net == 0
