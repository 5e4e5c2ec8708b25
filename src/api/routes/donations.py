from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field

from src.api.error import unwrap
from src.api.response import ApiResponse, ok
from src.api.utils.access import (
    enforce_entitlement,
    get_church_context,
    require_minimum_plan,
    resource_gate,
)
from src.api.utils.records import (
    RECORD_ERRORS,
    RecordPageResponse,
    RecordResponse,
    StatusChangeRequest,
    add_note_routes,
)
from src.api.utils.validators import DateRange, RequestModel, date_range_params, page_params
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import RequestContext
from src.app.use_cases.pagination import PageRequest
from src.app.use_cases.records import CategoryBreakdown, ChurchStatsUseCase, DonationUseCase
from src.depends import get_unit_of_work
from src.domain.entities import Currency, DonationPaymentMethod, DonationStatus, PlanName
from src.domain.plans import MAKE_DONATIONS

router = APIRouter(prefix="/churches/{church_id}/donations", tags=["Donations"])

donation_gate = resource_gate("donations", "donation_id")


class DonationRequest(RequestModel):
    campaign_id: Optional[UUID] = None
    donor_account_id: Optional[UUID] = None
    donor_name: Optional[str] = Field(None, max_length=100)
    is_anonymous: bool = False
    amount: float = Field(..., gt=0)
    currency: Currency = Currency.NGN
    category: Optional[str] = Field(None, max_length=50)
    payment_method: DonationPaymentMethod = DonationPaymentMethod.cash
    reference: Optional[str] = Field(None, max_length=100)
    status: DonationStatus = DonationStatus.completed


class DonationStatusRequest(StatusChangeRequest):
    status: DonationStatus


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RecordResponse)
async def create_donation(
    request: DonationRequest,
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Record a donation.

    A completed donation to a campaign adds to its raised amount.

    Raises:
        - 400 Bad Request: Initial status other than pending or completed
        - 404 Not Found: Campaign not found in this church
        - 409 Conflict: Campaign is not active
    """
    await enforce_entitlement(uow, context, MAKE_DONATIONS)

    values = request.model_dump(exclude_unset=True)
    values.setdefault("donor_account_id", context.account_id)
    result = await DonationUseCase(uow).create(context.church_id, context.account_id, values)
    return ok(unwrap(result, RECORD_ERRORS), "Donation recorded successfully")


@router.get("", status_code=status.HTTP_200_OK, response_model=RecordPageResponse)
async def list_donations(
    donation_status: Optional[DonationStatus] = Query(None, alias="status"),
    campaign_id: Optional[UUID] = None,
    category: Optional[str] = None,
    page: PageRequest = Depends(page_params),
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    filters = {"status": donation_status, "campaign_id": campaign_id, "category": category}
    result = await DonationUseCase(uow).list(context.church_id, page, filters)
    return ok(unwrap(result, RECORD_ERRORS))


@router.get(
    "/stats",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[CategoryBreakdown],
    dependencies=[Depends(require_minimum_plan(PlanName.starter))],
)
async def donation_stats(
    period: DateRange = Depends(date_range_params),
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Completed donations per category with a monthly breakdown, largest
    category first.

    Raises:
        - 403 Forbidden: Requires the starter plan or higher
    """
    result = await ChurchStatsUseCase(uow).donations(
        context.church_id, period.start_date, period.end_date
    )
    return ok(unwrap(result, RECORD_ERRORS))


@router.get("/{donation_id}", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def get_donation(
    context: RequestContext = Depends(donation_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DonationUseCase(uow).get(context.church_id, context.resource_id)
    return ok(unwrap(result, RECORD_ERRORS))


@router.post("/{donation_id}/status", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def change_donation_status(
    request: DonationStatusRequest,
    context: RequestContext = Depends(donation_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Complete, fail or refund a donation.

    Raises:
        - 409 Conflict: Transition not allowed from the current status
    """
    result = await DonationUseCase(uow).transition(
        context.church_id, context.resource_id, request.status, context.account_id, request.reason
    )
    return ok(unwrap(result, RECORD_ERRORS), f"Donation {request.status.value}")


add_note_routes(router, DonationUseCase, donation_gate, "donation_id")
