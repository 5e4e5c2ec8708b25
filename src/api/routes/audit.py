"""
Audit API Routes

Audit trail of the calling account and of a church.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.error import unwrap
from src.api.response import ApiResponse, ok
from src.api.utils.access import require_church_admin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import RequestContext
from src.app.use_cases.audit import AuditEventView, GetAuditEventsUseCase
from src.depends import get_request_context, get_unit_of_work

router = APIRouter(tags=["Audit"])

AUDIT_ERRORS = {"CHURCH_NOT_FOUND": status.HTTP_404_NOT_FOUND}


@router.get(
    "/auth/me/audit-events",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[List[AuditEventView]],
)
async def get_my_audit_events(
    action: Optional[str] = Query(None, max_length=100),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Events caused by the calling account, newest first.

    Query Parameters:
        - action: Only events of this action, e.g. "login"
        - limit: Maximum number of events to return (1-100, default 50)
    """
    result = await GetAuditEventsUseCase(uow).for_account(context.account_id, action, limit)
    return ok(unwrap(result, AUDIT_ERRORS))


@router.get(
    "/churches/{church_id}/audit-events",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[List[AuditEventView]],
)
async def get_church_audit_events(
    action: Optional[str] = Query(None, max_length=100),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Events recorded against a church, newest first.

    Raises:
        - 403 Forbidden: Caller is not a church admin
    """
    result = await GetAuditEventsUseCase(uow).for_church(context.church_id, action, limit)
    return ok(unwrap(result, AUDIT_ERRORS))
