from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import Field

from src.api.error import unwrap
from src.api.response import ok
from src.api.utils.access import get_church_context, resource_gate
from src.api.utils.records import (
    RECORD_ERRORS,
    MessageResponse,
    RecordPageResponse,
    RecordResponse,
    add_note_routes,
)
from src.api.utils.validators import Email, PhoneNumber, RequestModel, page_params
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import RequestContext
from src.app.use_cases.pagination import PageRequest
from src.app.use_cases.records import MemberUseCase
from src.depends import get_unit_of_work
from src.domain.entities import Gender, MaritalStatus, MemberRole, MembershipType

router = APIRouter(prefix="/churches/{church_id}/members", tags=["Members"])

member_gate = resource_gate("members", "member_id")


class MemberRequest(RequestModel):
    account_id: Optional[UUID] = None
    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    email: Optional[Email] = None
    phone: Optional[PhoneNumber] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    marital_status: Optional[MaritalStatus] = None
    role: MemberRole = MemberRole.member
    membership_type: MembershipType = MembershipType.regular


class UpdateMemberRequest(MemberRequest):
    first_name: Optional[str] = Field(None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(None, min_length=2, max_length=50)
    role: Optional[MemberRole] = None
    membership_type: Optional[MembershipType] = None
    is_active: Optional[bool] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RecordResponse)
async def create_member(
    request: MemberRequest,
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add a member to the church.

    Raises:
        - 404 Not Found: Linked account does not exist
        - 409 Conflict: Account or email already registered as a member
    """
    result = await MemberUseCase(uow).create(
        context.church_id, context.account_id, request.model_dump(exclude_unset=True)
    )
    return ok(unwrap(result, RECORD_ERRORS), "Member created successfully")


@router.get("", status_code=status.HTTP_200_OK, response_model=RecordPageResponse)
async def list_members(
    role: Optional[MemberRole] = None,
    membership_type: Optional[MembershipType] = None,
    is_active: Optional[bool] = None,
    page: PageRequest = Depends(page_params),
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    filters = {"role": role, "membership_type": membership_type, "is_active": is_active}
    result = await MemberUseCase(uow).list(context.church_id, page, filters)
    return ok(unwrap(result, RECORD_ERRORS))


@router.get("/{member_id}", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def get_member(
    context: RequestContext = Depends(member_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await MemberUseCase(uow).get(context.church_id, context.resource_id)
    return ok(unwrap(result, RECORD_ERRORS))


@router.put("/{member_id}", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def update_member(
    request: UpdateMemberRequest,
    context: RequestContext = Depends(member_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await MemberUseCase(uow).update(
        context.church_id, context.resource_id, request.model_dump(exclude_none=True)
    )
    return ok(unwrap(result, RECORD_ERRORS), "Member updated successfully")


@router.delete("/{member_id}", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def delete_member(
    context: RequestContext = Depends(member_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete the member and take them off every team roster"""
    result = await MemberUseCase(uow).delete(context.church_id, context.resource_id)
    unwrap(result, RECORD_ERRORS)
    return ok(message="Member deleted successfully")


add_note_routes(router, MemberUseCase, member_gate, "member_id")
