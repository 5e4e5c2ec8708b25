from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field

from src.api.error import unwrap
from src.api.response import ok
from src.api.utils.access import get_church_context, require_church_entitlement, resource_gate
from src.api.utils.records import (
    RECORD_ERRORS,
    MessageResponse,
    RecordPageResponse,
    RecordResponse,
    StatusChangeRequest,
)
from src.api.utils.validators import RequestModel, UtcDateTime, page_params
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import RequestContext
from src.app.use_cases.pagination import PageRequest
from src.app.use_cases.records import CampaignUseCase
from src.depends import get_unit_of_work
from src.domain.entities import CampaignStatus, Currency
from src.domain.plans import CREATE_CAMPAIGN

router = APIRouter(prefix="/churches/{church_id}/campaigns", tags=["Campaigns"])

campaign_gate = resource_gate("campaigns", "campaign_id")


class CampaignRequest(RequestModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[str] = Field(None, max_length=50)
    target_amount: float = Field(..., gt=0)
    currency: Currency = Currency.NGN
    start_date: Optional[UtcDateTime] = None
    end_date: Optional[UtcDateTime] = None


class UpdateCampaignRequest(CampaignRequest):
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    target_amount: Optional[float] = Field(None, gt=0)
    currency: Optional[Currency] = None


class CampaignStatusRequest(StatusChangeRequest):
    status: CampaignStatus


class CampaignUpdateRequest(RequestModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=2000)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RecordResponse)
async def create_campaign(
    request: CampaignRequest,
    context: RequestContext = Depends(require_church_entitlement(CREATE_CAMPAIGN)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create a draft donation campaign.

    Raises:
        - 400 Bad Request: End date before start date
        - 403 Forbidden: The church owner's plan allows no more campaigns
    """
    result = await CampaignUseCase(uow).create(
        context.church_id, context.account_id, request.model_dump(exclude_unset=True)
    )
    return ok(unwrap(result, RECORD_ERRORS), "Campaign created successfully")


@router.get("", status_code=status.HTTP_200_OK, response_model=RecordPageResponse)
async def list_campaigns(
    campaign_status: Optional[CampaignStatus] = Query(None, alias="status"),
    category: Optional[str] = None,
    page: PageRequest = Depends(page_params),
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    filters = {"status": campaign_status, "category": category}
    result = await CampaignUseCase(uow).list(context.church_id, page, filters)
    return ok(unwrap(result, RECORD_ERRORS))


@router.get("/{campaign_id}", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def get_campaign(
    context: RequestContext = Depends(campaign_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await CampaignUseCase(uow).get(context.church_id, context.resource_id)
    return ok(unwrap(result, RECORD_ERRORS))


@router.put("/{campaign_id}", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def update_campaign(
    request: UpdateCampaignRequest,
    context: RequestContext = Depends(campaign_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await CampaignUseCase(uow).update(
        context.church_id, context.resource_id, request.model_dump(exclude_none=True)
    )
    return ok(unwrap(result, RECORD_ERRORS), "Campaign updated successfully")


@router.delete("/{campaign_id}", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def delete_campaign(
    context: RequestContext = Depends(campaign_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete a draft campaign; other campaigns must be cancelled instead"""
    result = await CampaignUseCase(uow).delete(context.church_id, context.resource_id)
    unwrap(result, RECORD_ERRORS)
    return ok(message="Campaign deleted successfully")


@router.post("/{campaign_id}/status", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def change_campaign_status(
    request: CampaignStatusRequest,
    context: RequestContext = Depends(campaign_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Move the campaign through its lifecycle.

    Raises:
        - 409 Conflict: Transition not allowed from the current status
    """
    result = await CampaignUseCase(uow).transition(
        context.church_id, context.resource_id, request.status, context.account_id, request.reason
    )
    return ok(unwrap(result, RECORD_ERRORS), f"Campaign {request.status.value}")


@router.post("/{campaign_id}/updates", status_code=status.HTTP_201_CREATED, response_model=RecordResponse)
async def add_campaign_update(
    request: CampaignUpdateRequest,
    context: RequestContext = Depends(campaign_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await CampaignUseCase(uow).add_update(
        context.church_id, context.resource_id, context.account_id, request.title, request.content
    )
    return ok(unwrap(result, RECORD_ERRORS), "Campaign update posted")
