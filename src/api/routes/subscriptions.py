from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import Field

from src.api.error import unwrap
from src.api.response import ApiResponse, ok
from src.api.utils.validators import RequestModel
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import RequestContext
from src.app.use_cases.subscriptions import (
    BillingHistoryResponse,
    CancelSubscriptionUseCase,
    CancellationResponse,
    ChangePlanUseCase,
    ExpireLapsedResponse,
    ExpireLapsedSubscriptionsUseCase,
    GetBillingHistoryUseCase,
    GetSubscriptionAnalyticsUseCase,
    GetSubscriptionInfoUseCase,
    GetUsageSummaryUseCase,
    PlanInfo,
    RenewSubscriptionUseCase,
    SubscribeCommand,
    SubscribeUseCase,
    SubscriptionAnalytics,
    SubscriptionInfo,
    SubscriptionResponse,
    UsageSummary,
)
from src.depends import get_request_context, get_unit_of_work, require_roles
from src.domain.entities import AccountRole, BillingCycle, PaymentMethod, PlanName
from src.domain.plans import plans_in_order

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])

require_admin = require_roles(AccountRole.admin)

SUBSCRIPTION_ERRORS = {
    "PAYMENT_METHOD_REQUIRED": status.HTTP_400_BAD_REQUEST,
    "PLAN_LIMITS_EXCEEDED": status.HTTP_400_BAD_REQUEST,
    "SAME_PLAN": status.HTTP_400_BAD_REQUEST,
    "DOWNGRADE_EXCEEDS_USAGE": status.HTTP_400_BAD_REQUEST,
    "ALREADY_SUBSCRIBED": status.HTTP_409_CONFLICT,
    "NO_ACTIVE_SUBSCRIPTION": status.HTTP_404_NOT_FOUND,
    "NO_SUBSCRIPTION": status.HTTP_404_NOT_FOUND,
}


@router.get("/plans", status_code=status.HTTP_200_OK, response_model=ApiResponse[List[PlanInfo]])
async def list_plans():
    """Public plan catalog, cheapest first"""
    return ok([PlanInfo.from_plan(plan) for plan in plans_in_order()])


@router.get("/current", status_code=status.HTTP_200_OK, response_model=ApiResponse[SubscriptionInfo])
async def current_subscription(
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Current plan of the account; free when there is no current subscription"""
    result = await GetSubscriptionInfoUseCase(uow).execute(context.account_id)
    return ok(unwrap(result, SUBSCRIPTION_ERRORS))


@router.get("/usage", status_code=status.HTTP_200_OK, response_model=ApiResponse[UsageSummary])
async def usage(
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetUsageSummaryUseCase(uow).execute(context.account_id)
    return ok(unwrap(result, SUBSCRIPTION_ERRORS))


class SubscribeRequest(RequestModel):
    plan_name: PlanName
    billing_cycle: BillingCycle = BillingCycle.monthly
    payment_method: Optional[PaymentMethod] = None
    payment_details: Optional[Dict[str, Any]] = None
    auto_renew: bool = True


@router.post(
    "/subscribe", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[SubscriptionResponse]
)
async def subscribe(
    request: SubscribeRequest,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Start a subscription.

    Any active subscription of the account is cancelled first.

    Raises:
        - 400 Bad Request: Paid plan without payment method, or current usage
          above the plan's limits
        - 409 Conflict: Already subscribed to this plan
    """
    command = SubscribeCommand(**request.model_dump())
    result = await SubscribeUseCase(uow).execute(context.account_id, command)
    return ok(unwrap(result, SUBSCRIPTION_ERRORS), f"Subscribed to {request.plan_name.value} plan")


class ChangePlanRequest(RequestModel):
    plan_name: PlanName
    billing_cycle: BillingCycle = BillingCycle.monthly
    payment_method: Optional[PaymentMethod] = None
    payment_details: Optional[Dict[str, Any]] = None


@router.put("/upgrade", status_code=status.HTTP_200_OK, response_model=ApiResponse[SubscriptionResponse])
async def change_plan(
    request: ChangePlanRequest,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Move to another plan.

    Raises:
        - 400 Bad Request: Same plan, or a downgrade below current usage
    """
    command = SubscribeCommand(**request.model_dump())
    result = await ChangePlanUseCase(uow).execute(context.account_id, command)
    return ok(unwrap(result, SUBSCRIPTION_ERRORS), "Subscription updated successfully")


class CancelRequest(RequestModel):
    reason: Optional[str] = Field(None, max_length=500)


@router.put("/cancel", status_code=status.HTTP_200_OK, response_model=ApiResponse[CancellationResponse])
async def cancel(
    request: Optional[CancelRequest] = None,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await CancelSubscriptionUseCase(uow).execute(
        context.account_id, request.reason if request else None
    )
    return ok(unwrap(result, SUBSCRIPTION_ERRORS), "Subscription cancelled successfully")


class RenewRequest(RequestModel):
    billing_cycle: Optional[BillingCycle] = None


@router.put("/renew", status_code=status.HTTP_200_OK, response_model=ApiResponse[SubscriptionResponse])
async def renew(
    request: Optional[RenewRequest] = None,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await RenewSubscriptionUseCase(uow).execute(
        context.account_id, request.billing_cycle if request else None
    )
    return ok(unwrap(result, SUBSCRIPTION_ERRORS), "Subscription renewed successfully")


@router.get(
    "/billing-history", status_code=status.HTTP_200_OK, response_model=ApiResponse[BillingHistoryResponse]
)
async def billing_history(
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetBillingHistoryUseCase(uow).execute(context.account_id)
    return ok(unwrap(result, SUBSCRIPTION_ERRORS))


@router.get(
    "/analytics", status_code=status.HTTP_200_OK, response_model=ApiResponse[SubscriptionAnalytics]
)
async def analytics(
    context: RequestContext = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetSubscriptionAnalyticsUseCase(uow).execute()
    return ok(unwrap(result, SUBSCRIPTION_ERRORS))


@router.post(
    "/expire-lapsed", status_code=status.HTTP_200_OK, response_model=ApiResponse[ExpireLapsedResponse]
)
async def expire_lapsed(
    context: RequestContext = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Mark active subscriptions whose period has ended as expired"""
    result = await ExpireLapsedSubscriptionsUseCase(uow).execute()
    return ok(unwrap(result, SUBSCRIPTION_ERRORS))
