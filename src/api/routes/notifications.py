from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import Field

from src.api.error import unwrap
from src.api.response import ApiResponse, ok
from src.api.utils.access import require_active_subscription, require_church_admin
from src.api.utils.validators import RequestModel, page_params
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import RequestContext
from src.app.use_cases.notifications import (
    MarkAllReadResponse,
    NotificationResponse,
    RecipientNotificationsUseCase,
    SendNotificationCommand,
    SendNotificationResponse,
    SendNotificationUseCase,
    UnreadCountResponse,
)
from src.app.use_cases.pagination import Page, PageRequest
from src.depends import get_notification_dispatcher, get_request_context, get_unit_of_work
from src.domain.entities import (
    NotificationChannel,
    NotificationPriority,
    NotificationType,
    RecipientGroup,
)

router = APIRouter(prefix="/notifications", tags=["Notifications"])

NOTIFICATION_ERRORS = {
    "RECIPIENTS_REQUIRED": status.HTTP_400_BAD_REQUEST,
    "INVALID_RECIPIENTS": status.HTTP_400_BAD_REQUEST,
    "NOTIFICATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class SendNotificationRequest(RequestModel):
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=2000)
    type: NotificationType = NotificationType.general
    priority: NotificationPriority = NotificationPriority.normal
    channels: List[NotificationChannel] = Field(
        default_factory=lambda: [NotificationChannel.in_app], min_length=1
    )
    recipient_group: RecipientGroup = RecipientGroup.all
    recipient_ids: List[UUID] = Field(default_factory=list)


@router.get("", status_code=status.HTTP_200_OK, response_model=ApiResponse[Page[NotificationResponse]])
async def list_notifications(
    is_read: Optional[bool] = None,
    include_archived: bool = False,
    page: PageRequest = Depends(page_params),
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List the caller's notifications, newest first; archived ones are hidden by default"""
    result = await RecipientNotificationsUseCase(uow).list(
        context.account_id, page, is_read=is_read, include_archived=include_archived
    )
    return ok(unwrap(result, NOTIFICATION_ERRORS))


@router.get("/unread-count", status_code=status.HTTP_200_OK, response_model=ApiResponse[UnreadCountResponse])
async def unread_count(
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await RecipientNotificationsUseCase(uow).unread_count(context.account_id)
    return ok(unwrap(result, NOTIFICATION_ERRORS))


@router.put("/read-all", status_code=status.HTTP_200_OK, response_model=ApiResponse[MarkAllReadResponse])
async def mark_all_read(
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await RecipientNotificationsUseCase(uow).mark_all_read(context.account_id)
    return ok(unwrap(result, NOTIFICATION_ERRORS), "All notifications marked as read")


@router.put(
    "/{notification_id}/read",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[NotificationResponse],
)
async def mark_read(
    notification_id: UUID,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Mark one notification as read. Repeating the call changes nothing.

    Raises:
        - 404 Not Found: No such notification addressed to the caller
    """
    result = await RecipientNotificationsUseCase(uow).mark_read(context.account_id, notification_id)
    return ok(unwrap(result, NOTIFICATION_ERRORS), "Notification marked as read")


@router.put(
    "/{notification_id}/archive",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[NotificationResponse],
)
async def archive_notification(
    notification_id: UUID,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await RecipientNotificationsUseCase(uow).archive(context.account_id, notification_id)
    return ok(unwrap(result, NOTIFICATION_ERRORS), "Notification archived")


@router.delete("/{notification_id}", status_code=status.HTTP_200_OK, response_model=ApiResponse[None])
async def delete_notification(
    notification_id: UUID,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await RecipientNotificationsUseCase(uow).delete(context.account_id, notification_id)
    unwrap(result, NOTIFICATION_ERRORS)
    return ok(message="Notification deleted successfully")


@router.post(
    "/churches/{church_id}/send",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[SendNotificationResponse],
    dependencies=[Depends(require_active_subscription)],
)
async def send_notification(
    request: SendNotificationRequest,
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """
    Send a notification to a group of the church's accounts.

    Raises:
        - 400 Bad Request: Missing or unrelated recipient_ids for group "specific"
        - 403 Forbidden: Not a church admin, or no active subscription
    """
    command = SendNotificationCommand(**request.model_dump())
    result = await SendNotificationUseCase(uow, dispatcher).execute(
        context.church_id, context.account_id, command
    )
    response = unwrap(result, NOTIFICATION_ERRORS)
    return ok(response, f"Notification sent to {response.sent} recipient(s)")
