"""
Shared pieces of the church record routers.
"""

from typing import Any, Callable, Dict, Optional, Type

from fastapi import APIRouter, Depends, status
from pydantic import Field

from src.api.error import unwrap
from src.api.response import ApiResponse, ok
from src.api.utils.validators import RequestModel
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import RequestContext
from src.app.use_cases.pagination import Page
from src.app.use_cases.records import ChurchRecordUseCase
from src.depends import get_unit_of_work

RECORD_ERRORS = {
    "INVALID_DATE_RANGE": status.HTTP_400_BAD_REQUEST,
    "INVALID_INITIAL_STATUS": status.HTTP_400_BAD_REQUEST,
    "NOTE_FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "ACCOUNT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "MEMBER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TEAM_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CAMPAIGN_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DONATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "EXPENSE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "FINANCIAL_RECORD_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "NOTE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "NOT_ON_TEAM": status.HTTP_404_NOT_FOUND,
    "ATTACHMENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "MEMBER_EXISTS": status.HTTP_409_CONFLICT,
    "ALREADY_ON_TEAM": status.HTTP_409_CONFLICT,
    "CAMPAIGN_NOT_DRAFT": status.HTTP_409_CONFLICT,
    "CAMPAIGN_NOT_ACTIVE": status.HTTP_409_CONFLICT,
    "EXPENSE_LOCKED": status.HTTP_409_CONFLICT,
    "RECORD_LOCKED": status.HTTP_409_CONFLICT,
    "INVALID_STATUS_TRANSITION": status.HTTP_409_CONFLICT,
}

RecordResponse = ApiResponse[Dict[str, Any]]
RecordPageResponse = ApiResponse[Page[Dict[str, Any]]]
MessageResponse = ApiResponse[Any]


class NoteRequest(RequestModel):
    content: str = Field(..., min_length=1, max_length=1000)


class StatusChangeRequest(RequestModel):
    reason: Optional[str] = Field(None, max_length=500)


def add_note_routes(
    router: APIRouter,
    use_case_class: Type[ChurchRecordUseCase],
    gate: Callable,
    param: str,
) -> None:
    """Register POST/PUT/DELETE note endpoints under /{param}/notes"""

    @router.post(
        f"/{{{param}}}/notes", status_code=status.HTTP_201_CREATED, response_model=RecordResponse
    )
    async def add_note(
        request: NoteRequest,
        context: RequestContext = Depends(gate),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ):
        result = await use_case_class(uow).add_note(
            context.church_id, context.resource_id, context.account_id, request.content
        )
        return ok(unwrap(result, RECORD_ERRORS), "Note added successfully")

    @router.put(
        f"/{{{param}}}/notes/{{note_id}}", status_code=status.HTTP_200_OK, response_model=RecordResponse
    )
    async def update_note(
        note_id: str,
        request: NoteRequest,
        context: RequestContext = Depends(gate),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ):
        """Only the note's author or a church admin may edit it"""
        result = await use_case_class(uow).update_note(
            context.church_id,
            context.resource_id,
            note_id,
            context.account_id,
            context.church_role,
            request.content,
        )
        return ok(unwrap(result, RECORD_ERRORS), "Note updated successfully")

    @router.delete(
        f"/{{{param}}}/notes/{{note_id}}", status_code=status.HTTP_200_OK, response_model=RecordResponse
    )
    async def delete_note(
        note_id: str,
        context: RequestContext = Depends(gate),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ):
        result = await use_case_class(uow).delete_note(
            context.church_id, context.resource_id, note_id, context.account_id, context.church_role
        )
        return ok(unwrap(result, RECORD_ERRORS), "Note deleted successfully")
