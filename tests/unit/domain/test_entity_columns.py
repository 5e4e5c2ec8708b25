from datetime import datetime
from typing import Optional

import pytest
from sqlalchemy import DateTime

from src.domain import entities

TABLES = [
    model
    for model in vars(entities).values()
    if isinstance(model, type) and hasattr(model, "__table__")
]

DATETIME_COLUMNS = [
    (model, name)
    for model in TABLES
    for name, field in model.model_fields.items()
    if field.annotation in (datetime, Optional[datetime]) and name in model.__table__.c
]


def test_every_table_has_timestamps():
    names = {(model.__name__, name) for model, name in DATETIME_COLUMNS}
    assert ("Expense", "paid_at") in names
    assert ("ManualFinancialRecord", "record_date") in names
    assert ("Member", "created_at") in names


@pytest.mark.parametrize(
    "model,name", DATETIME_COLUMNS, ids=[f"{m.__name__}.{n}" for m, n in DATETIME_COLUMNS]
)
def test_timestamps_are_naive_utc_columns(model, name):
    """utcnow() values are naive; the column must not require a timezone"""
    column_type = model.__table__.c[name].type

    assert type(column_type) is DateTime
    assert column_type.timezone is False
