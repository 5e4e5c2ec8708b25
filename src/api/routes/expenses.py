from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field

from src.api.error import unwrap
from src.api.response import ApiResponse, ok
from src.api.utils.access import (
    get_church_context,
    require_church_admin,
    require_minimum_plan,
    resource_gate,
)
from src.api.utils.records import (
    RECORD_ERRORS,
    MessageResponse,
    RecordPageResponse,
    RecordResponse,
    StatusChangeRequest,
    add_note_routes,
)
from src.api.utils.validators import (
    AttachmentRequest,
    DateRange,
    RequestModel,
    UtcDateTime,
    date_range_params,
    page_params,
)
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import RequestContext
from src.app.use_cases.pagination import PageRequest
from src.app.use_cases.records import CategoryBreakdown, ChurchStatsUseCase, ExpenseUseCase
from src.depends import get_unit_of_work
from src.domain.entities import Currency, ExpensePriority, ExpenseStatus, PlanName

router = APIRouter(prefix="/churches/{church_id}/expenses", tags=["Expenses"])

expense_gate = resource_gate("expenses", "expense_id")


class ExpenseRequest(RequestModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    amount: float = Field(..., gt=0)
    currency: Currency = Currency.NGN
    category: str = Field(..., min_length=1, max_length=50)
    priority: ExpensePriority = ExpensePriority.medium
    vendor: Optional[str] = Field(None, max_length=100)
    due_date: Optional[UtcDateTime] = None


class UpdateExpenseRequest(ExpenseRequest):
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    amount: Optional[float] = Field(None, gt=0)
    currency: Optional[Currency] = None
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    priority: Optional[ExpensePriority] = None


class ApproveRequest(StatusChangeRequest):
    approved_amount: Optional[float] = Field(None, gt=0)


class PayRequest(StatusChangeRequest):
    payment_method: Optional[str] = Field(None, max_length=30)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RecordResponse)
async def create_expense(
    request: ExpenseRequest,
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Submit an expense for review; it starts pending"""
    result = await ExpenseUseCase(uow).create(
        context.church_id, context.account_id, request.model_dump(exclude_unset=True)
    )
    return ok(unwrap(result, RECORD_ERRORS), "Expense created successfully")


@router.get("", status_code=status.HTTP_200_OK, response_model=RecordPageResponse)
async def list_expenses(
    expense_status: Optional[ExpenseStatus] = Query(None, alias="status"),
    category: Optional[str] = None,
    priority: Optional[ExpensePriority] = None,
    page: PageRequest = Depends(page_params),
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    filters = {"status": expense_status, "category": category, "priority": priority}
    result = await ExpenseUseCase(uow).list(context.church_id, page, filters)
    return ok(unwrap(result, RECORD_ERRORS))


@router.get(
    "/stats",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[CategoryBreakdown],
    dependencies=[Depends(require_minimum_plan(PlanName.starter))],
)
async def expense_stats(
    period: DateRange = Depends(date_range_params),
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Approved and paid expenses per category with a monthly breakdown,
    largest category first.

    Raises:
        - 403 Forbidden: Requires the starter plan or higher
    """
    result = await ChurchStatsUseCase(uow).expenses(
        context.church_id, period.start_date, period.end_date
    )
    return ok(unwrap(result, RECORD_ERRORS))


@router.get("/{expense_id}", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def get_expense(
    context: RequestContext = Depends(expense_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ExpenseUseCase(uow).get(context.church_id, context.resource_id)
    return ok(unwrap(result, RECORD_ERRORS))


@router.put("/{expense_id}", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def update_expense(
    request: UpdateExpenseRequest,
    context: RequestContext = Depends(expense_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Edit a pending expense.

    Raises:
        - 409 Conflict: Expense is no longer pending
    """
    result = await ExpenseUseCase(uow).update(
        context.church_id, context.resource_id, request.model_dump(exclude_none=True)
    )
    return ok(unwrap(result, RECORD_ERRORS), "Expense updated successfully")


@router.delete("/{expense_id}", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def delete_expense(
    context: RequestContext = Depends(expense_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ExpenseUseCase(uow).delete(context.church_id, context.resource_id)
    unwrap(result, RECORD_ERRORS)
    return ok(message="Expense deleted successfully")


# ----------------------------------------------------------------------------
# Review workflow
# ----------------------------------------------------------------------------


async def _transition(
    uow: UnitOfWork,
    context: RequestContext,
    target: ExpenseStatus,
    reason: Optional[str],
    values: Optional[dict] = None,
):
    result = await ExpenseUseCase(uow).transition(
        context.church_id, context.resource_id, target, context.account_id, reason, values
    )
    return ok(unwrap(result, RECORD_ERRORS), f"Expense {target.value}")


@router.post(
    "/{expense_id}/approve",
    status_code=status.HTTP_200_OK,
    response_model=RecordResponse,
    dependencies=[Depends(require_church_admin)],
)
async def approve_expense(
    request: ApproveRequest,
    context: RequestContext = Depends(expense_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """approved_amount defaults to the requested amount"""
    return await _transition(
        uow,
        context,
        ExpenseStatus.approved,
        request.reason,
        {"approved_amount": request.approved_amount},
    )


@router.post(
    "/{expense_id}/reject",
    status_code=status.HTTP_200_OK,
    response_model=RecordResponse,
    dependencies=[Depends(require_church_admin)],
)
async def reject_expense(
    request: StatusChangeRequest,
    context: RequestContext = Depends(expense_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await _transition(uow, context, ExpenseStatus.rejected, request.reason)


@router.post(
    "/{expense_id}/pay",
    status_code=status.HTTP_200_OK,
    response_model=RecordResponse,
    dependencies=[Depends(require_church_admin)],
)
async def pay_expense(
    request: PayRequest,
    context: RequestContext = Depends(expense_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Mark an approved expense as paid.

    Raises:
        - 409 Conflict: Expense is not approved
    """
    return await _transition(
        uow, context, ExpenseStatus.paid, request.reason, {"payment_method": request.payment_method}
    )


@router.post("/{expense_id}/cancel", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def cancel_expense(
    request: StatusChangeRequest,
    context: RequestContext = Depends(expense_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await _transition(uow, context, ExpenseStatus.cancelled, request.reason)


# ----------------------------------------------------------------------------
# Attachments
# ----------------------------------------------------------------------------


@router.post(
    "/{expense_id}/attachments", status_code=status.HTTP_201_CREATED, response_model=RecordResponse
)
async def add_attachment(
    request: AttachmentRequest,
    context: RequestContext = Depends(expense_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Attach a receipt or invoice already stored externally.

    Raises:
        - 400 Bad Request: Disallowed file type or larger than 5 MB
    """
    result = await ExpenseUseCase(uow).add_attachment(
        context.church_id, context.resource_id, context.account_id, request.model_dump()
    )
    return ok(unwrap(result, RECORD_ERRORS), "Attachment added successfully")


@router.delete(
    "/{expense_id}/attachments/{attachment_id}",
    status_code=status.HTTP_200_OK,
    response_model=RecordResponse,
)
async def remove_attachment(
    attachment_id: str,
    context: RequestContext = Depends(expense_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ExpenseUseCase(uow).remove_attachment(
        context.church_id, context.resource_id, attachment_id
    )
    return ok(unwrap(result, RECORD_ERRORS), "Attachment removed successfully")


add_note_routes(router, ExpenseUseCase, expense_gate, "expense_id")
