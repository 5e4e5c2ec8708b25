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
from src.api.utils.validators import DateRange, RequestModel, UtcDateTime, date_range_params, page_params
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import RequestContext
from src.app.use_cases.pagination import PageRequest
from src.app.use_cases.records import FinancialRecordUseCase, FinancialSummary
from src.depends import get_unit_of_work
from src.domain.entities import (
    Currency,
    FinancialRecordStatus,
    FinancialRecordType,
    PlanName,
)

router = APIRouter(prefix="/churches/{church_id}/financial-records", tags=["Financial Records"])

record_gate = resource_gate("financial_records", "record_id")


class FinancialRecordRequest(RequestModel):
    record_type: FinancialRecordType
    category: str = Field(..., min_length=1, max_length=50)
    amount: float = Field(..., gt=0)
    currency: Currency = Currency.NGN
    description: Optional[str] = Field(None, max_length=500)
    record_date: UtcDateTime
    reference: Optional[str] = Field(None, max_length=100)


class UpdateFinancialRecordRequest(FinancialRecordRequest):
    record_type: Optional[FinancialRecordType] = None
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    amount: Optional[float] = Field(None, gt=0)
    currency: Optional[Currency] = None
    record_date: Optional[UtcDateTime] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RecordResponse)
async def create_record(
    request: FinancialRecordRequest,
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Enter income or an expense by hand; it starts pending verification"""
    result = await FinancialRecordUseCase(uow).create(
        context.church_id, context.account_id, request.model_dump(exclude_unset=True)
    )
    return ok(unwrap(result, RECORD_ERRORS), "Financial record created successfully")


@router.get("", status_code=status.HTTP_200_OK, response_model=RecordPageResponse)
async def list_records(
    record_type: Optional[FinancialRecordType] = None,
    record_status: Optional[FinancialRecordStatus] = Query(None, alias="status"),
    category: Optional[str] = None,
    page: PageRequest = Depends(page_params),
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    filters = {"record_type": record_type, "status": record_status, "category": category}
    result = await FinancialRecordUseCase(uow).list(context.church_id, page, filters)
    return ok(unwrap(result, RECORD_ERRORS))


@router.get(
    "/summary",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[FinancialSummary],
    dependencies=[Depends(require_minimum_plan(PlanName.starter))],
)
async def financial_summary(
    period: DateRange = Depends(date_range_params),
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Reconcile donations, paid expenses and verified manual records.

    Raises:
        - 400 Bad Request: start_date after end_date
        - 403 Forbidden: Requires the starter plan or higher
    """
    result = await FinancialRecordUseCase(uow).summary(
        context.church_id, period.start_date, period.end_date
    )
    return ok(unwrap(result, RECORD_ERRORS))


@router.get("/{record_id}", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def get_record(
    context: RequestContext = Depends(record_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await FinancialRecordUseCase(uow).get(context.church_id, context.resource_id)
    return ok(unwrap(result, RECORD_ERRORS))


@router.put("/{record_id}", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def update_record(
    request: UpdateFinancialRecordRequest,
    context: RequestContext = Depends(record_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await FinancialRecordUseCase(uow).update(
        context.church_id, context.resource_id, request.model_dump(exclude_none=True)
    )
    return ok(unwrap(result, RECORD_ERRORS), "Financial record updated successfully")


@router.delete("/{record_id}", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def delete_record(
    context: RequestContext = Depends(record_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await FinancialRecordUseCase(uow).delete(context.church_id, context.resource_id)
    unwrap(result, RECORD_ERRORS)
    return ok(message="Financial record deleted successfully")


@router.post(
    "/{record_id}/verify",
    status_code=status.HTTP_200_OK,
    response_model=RecordResponse,
    dependencies=[Depends(require_church_admin)],
)
async def verify_record(
    request: StatusChangeRequest,
    context: RequestContext = Depends(record_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await FinancialRecordUseCase(uow).transition(
        context.church_id,
        context.resource_id,
        FinancialRecordStatus.verified,
        context.account_id,
        request.reason,
    )
    return ok(unwrap(result, RECORD_ERRORS), "Financial record verified")


@router.post(
    "/{record_id}/reject",
    status_code=status.HTTP_200_OK,
    response_model=RecordResponse,
    dependencies=[Depends(require_church_admin)],
)
async def reject_record(
    request: StatusChangeRequest,
    context: RequestContext = Depends(record_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await FinancialRecordUseCase(uow).transition(
        context.church_id,
        context.resource_id,
        FinancialRecordStatus.rejected,
        context.account_id,
        request.reason,
    )
    return ok(unwrap(result, RECORD_ERRORS), "Financial record rejected")


add_note_routes(router, FinancialRecordUseCase, record_gate, "record_id")
