"""
Expense Use Case
"""

import uuid
from typing import Any, Dict, Optional
from uuid import UUID

from src.domain.base import utcnow
from src.domain.entities import Expense, ExpenseStatus
from src.domain.lifecycle import EXPENSE_TRANSITIONS
from src.libs.result import Error, Result, Return
from .church_record_use_case import PROTECTED_FIELDS, ChurchRecordUseCase


class ExpenseUseCase(ChurchRecordUseCase):
    """
    Expenses and their review workflow.

    Business Rules:
    - Lifecycle: pending -> approved | rejected | cancelled, approved -> paid | cancelled
    - Only pending expenses can be edited or deleted
    - approved_amount defaults to the requested amount
    - paid_at is stamped by the paid transition
    """

    collection = "expenses"
    model = Expense
    not_found_code = "EXPENSE_NOT_FOUND"
    label = "Expense"
    transitions = EXPENSE_TRANSITIONS
    protected_fields = PROTECTED_FIELDS | {"paid_at"}

    async def _validate(
        self, church_id: UUID, values: Dict[str, Any], record: Optional[Expense] = None
    ) -> Optional[Error]:
        if record is not None and record.status != ExpenseStatus.pending:
            return Error("EXPENSE_LOCKED", "Only pending expenses can be edited")
        return None

    async def _before_delete(self, record: Expense) -> Optional[Error]:
        if record.status != ExpenseStatus.pending:
            return Error("EXPENSE_LOCKED", "Only pending expenses can be deleted")
        return None

    async def _on_transition(
        self, record: Expense, target: str, actor_id: UUID, values: Dict[str, Any]
    ) -> Optional[Error]:
        if target == ExpenseStatus.approved:
            record.approved_amount = values.get("approved_amount") or record.amount
        elif target == ExpenseStatus.paid:
            if values.get("payment_method"):
                record.payment_method = values["payment_method"]
            record.paid_at = utcnow()
        return None

    async def add_attachment(
        self, church_id: UUID, expense_id: UUID, actor_id: UUID, metadata: Dict[str, Any]
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            expense = await self.uow.expenses.get_in_church(expense_id, church_id)
            if expense is None:
                return self._not_found()

            expense.attachments = [
                *(expense.attachments or []),
                {
                    "id": str(uuid.uuid4()),
                    **metadata,
                    "uploaded_by": str(actor_id),
                    "uploaded_at": utcnow().isoformat(),
                },
            ]
            expense.updated_at = utcnow()
            expense = await self.uow.expenses.update(expense)
            await self.uow.commit()

            return Return.ok(self._view(expense))

    async def remove_attachment(
        self, church_id: UUID, expense_id: UUID, attachment_id: str
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            expense = await self.uow.expenses.get_in_church(expense_id, church_id)
            if expense is None:
                return self._not_found()

            kept = [a for a in expense.attachments or [] if a.get("id") != attachment_id]
            if len(kept) == len(expense.attachments or []):
                return Return.err(Error("ATTACHMENT_NOT_FOUND", "Attachment not found"))

            expense.attachments = kept
            expense.updated_at = utcnow()
            expense = await self.uow.expenses.update(expense)
            await self.uow.commit()

            return Return.ok(self._view(expense))
