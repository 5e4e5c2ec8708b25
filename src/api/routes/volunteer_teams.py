from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import Field

from src.api.error import unwrap
from src.api.response import ok
from src.api.utils.access import (
    enforce_entitlement,
    get_church_context,
    require_church_entitlement,
    resource_gate,
)
from src.api.utils.records import (
    RECORD_ERRORS,
    MessageResponse,
    RecordPageResponse,
    RecordResponse,
    add_note_routes,
)
from src.api.utils.validators import RequestModel, page_params
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import RequestContext
from src.app.use_cases.pagination import PageRequest
from src.app.use_cases.records import VolunteerTeamUseCase
from src.depends import get_unit_of_work
from src.domain.plans import CREATE_VOLUNTEER_TEAM

router = APIRouter(prefix="/churches/{church_id}/volunteer-teams", tags=["Volunteer Teams"])

team_gate = resource_gate("volunteer_teams", "team_id")


class TeamRequest(RequestModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = Field(None, max_length=50)
    leader_member_id: Optional[UUID] = None


class UpdateTeamRequest(TeamRequest):
    name: Optional[str] = Field(None, min_length=2, max_length=100)


class RosterRequest(RequestModel):
    member_id: UUID
    team_role: Optional[str] = Field(None, max_length=50)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RecordResponse)
async def create_team(
    request: TeamRequest,
    context: RequestContext = Depends(require_church_entitlement(CREATE_VOLUNTEER_TEAM)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create a volunteer team.

    Raises:
        - 403 Forbidden: The church owner's plan allows no more teams
        - 404 Not Found: Leader is not a member of this church
    """
    result = await VolunteerTeamUseCase(uow).create(
        context.church_id, context.account_id, request.model_dump(exclude_unset=True)
    )
    return ok(unwrap(result, RECORD_ERRORS), "Volunteer team created successfully")


@router.get("", status_code=status.HTTP_200_OK, response_model=RecordPageResponse)
async def list_teams(
    category: Optional[str] = None,
    is_active: Optional[bool] = None,
    page: PageRequest = Depends(page_params),
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    filters = {"category": category, "is_active": is_active}
    result = await VolunteerTeamUseCase(uow).list(context.church_id, page, filters)
    return ok(unwrap(result, RECORD_ERRORS))


@router.get("/{team_id}", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def get_team(
    context: RequestContext = Depends(team_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await VolunteerTeamUseCase(uow).get(context.church_id, context.resource_id)
    return ok(unwrap(result, RECORD_ERRORS))


@router.put("/{team_id}", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def update_team(
    request: UpdateTeamRequest,
    context: RequestContext = Depends(team_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await VolunteerTeamUseCase(uow).update(
        context.church_id, context.resource_id, request.model_dump(exclude_none=True)
    )
    return ok(unwrap(result, RECORD_ERRORS), "Volunteer team updated successfully")


@router.delete("/{team_id}", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def delete_team(
    context: RequestContext = Depends(team_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await VolunteerTeamUseCase(uow).delete(context.church_id, context.resource_id)
    unwrap(result, RECORD_ERRORS)
    return ok(message="Volunteer team deleted successfully")


@router.post("/{team_id}/activate", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def activate_team(
    context: RequestContext = Depends(team_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Reactivate a team.

    An inactive team counts against the owner's plan again, so the same
    limit as creating a team applies.

    Raises:
        - 403 Forbidden: The church owner's plan allows no more teams
    """
    if not context.resource.get("is_active"):
        await enforce_entitlement(uow, context, CREATE_VOLUNTEER_TEAM, church_id=context.church_id)

    result = await VolunteerTeamUseCase(uow).set_active(context.church_id, context.resource_id, True)
    return ok(unwrap(result, RECORD_ERRORS), "Volunteer team activated")


@router.post("/{team_id}/deactivate", status_code=status.HTTP_200_OK, response_model=RecordResponse)
async def deactivate_team(
    context: RequestContext = Depends(team_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await VolunteerTeamUseCase(uow).set_active(context.church_id, context.resource_id, False)
    return ok(unwrap(result, RECORD_ERRORS), "Volunteer team deactivated")


@router.post("/{team_id}/members", status_code=status.HTTP_201_CREATED, response_model=RecordResponse)
async def add_team_member(
    request: RosterRequest,
    context: RequestContext = Depends(team_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Put an active church member on the roster.

    Raises:
        - 404 Not Found: Member not found in this church
        - 409 Conflict: Member already on the team
    """
    result = await VolunteerTeamUseCase(uow).add_to_roster(
        context.church_id, context.resource_id, request.member_id, request.team_role
    )
    return ok(unwrap(result, RECORD_ERRORS), "Member added to team")


@router.delete(
    "/{team_id}/members/{member_id}", status_code=status.HTTP_200_OK, response_model=RecordResponse
)
async def remove_team_member(
    member_id: UUID,
    context: RequestContext = Depends(team_gate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await VolunteerTeamUseCase(uow).remove_from_roster(
        context.church_id, context.resource_id, member_id
    )
    return ok(unwrap(result, RECORD_ERRORS), "Member removed from team")


add_note_routes(router, VolunteerTeamUseCase, team_gate, "team_id")
