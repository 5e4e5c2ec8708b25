"""
Expense Entity
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, DateTime, Field, Index

from .church_record import LifecycleRecord
from .enums import Currency, ExpensePriority, ExpenseStatus


class Expense(LifecycleRecord, table=True):
    """
    Expense entity.

    Business Rules:
    - Lifecycle: pending -> approved | rejected | cancelled, approved -> paid
    - approved_amount defaults to amount on approval
    - paid_at is stamped once, on the paid transition; summaries date
      paid expenses by it
    - Attachments hold metadata only; files live in external storage
    """

    __tablename__ = "expenses"

    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    amount: float = Field(gt=0)
    approved_amount: Optional[float] = None
    currency: Currency = Field(default=Currency.NGN)
    category: str = Field(max_length=50)
    priority: ExpensePriority = Field(default=ExpensePriority.medium)
    payment_method: Optional[str] = Field(default=None, max_length=30)
    vendor: Optional[str] = Field(default=None, max_length=100)
    due_date: Optional[datetime] = Field(default=None, sa_type=DateTime)
    paid_at: Optional[datetime] = Field(default=None, sa_type=DateTime)

    status: ExpenseStatus = Field(default=ExpenseStatus.pending)
    attachments: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)

    __table_args__ = (Index("idx_expense_church_status", "church_id", "status"),)
