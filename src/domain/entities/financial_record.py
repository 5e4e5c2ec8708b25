"""
ManualFinancialRecord Entity

Income or expense entered by hand for reconciliation.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field

from .church_record import LifecycleRecord
from .enums import Currency, FinancialRecordStatus, FinancialRecordType


class ManualFinancialRecord(LifecycleRecord, table=True):
    """
    ManualFinancialRecord entity.

    Business Rules:
    - Lifecycle: pending -> verified | rejected
    - Only verified records enter the financial summary
    """

    __tablename__ = "financial_records"

    record_type: FinancialRecordType
    category: str = Field(max_length=50)
    amount: float = Field(gt=0)
    currency: Currency = Field(default=Currency.NGN)
    description: Optional[str] = Field(default=None, max_length=500)
    record_date: datetime = Field(sa_type=DateTime)
    reference: Optional[str] = Field(default=None, max_length=100)

    status: FinancialRecordStatus = Field(default=FinancialRecordStatus.pending)
