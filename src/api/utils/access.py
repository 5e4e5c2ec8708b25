"""
Tenant, resource and entitlement gates.

Each gate is a FastAPI dependency that returns a new RequestContext (or the
one it was given) and raises ClientError/ServerError to stop the request.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request, status

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import LoadChurchResourceUseCase, RequestContext, ResolveChurchAccessUseCase
from src.app.use_cases.subscriptions import (
    CheckActiveSubscriptionUseCase,
    CheckMinimumPlanUseCase,
    EntitlementDecision,
    EvaluateEntitlementUseCase,
)
from src.depends import get_request_context, get_unit_of_work
from src.domain.entities import ChurchRole, PlanName
from src.libs.result import Error, Result

logger = logging.getLogger(__name__)

CHURCH_ACCESS_STATUS = {
    "CHURCH_ID_REQUIRED": status.HTTP_400_BAD_REQUEST,
    "INVALID_CHURCH_ID": status.HTTP_400_BAD_REQUEST,
    "CHURCH_ACCESS_DENIED": status.HTTP_403_FORBIDDEN,
}

RESOURCE_STATUS = {
    "CHURCH_ACCESS_NOT_VERIFIED": status.HTTP_400_BAD_REQUEST,
    "INVALID_RESOURCE_ID": status.HTTP_400_BAD_REQUEST,
    "RESOURCE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


async def get_church_context(
    request: Request,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> RequestContext:
    """
    Resolve the account's access to the church named by the `church_id`
    path parameter.

    Raises:
        ClientError: 400 for a missing or malformed id, 403 when the account
            is neither a church admin nor an active member
        ServerError: if the lookup fails
    """
    church_id = request.path_params.get("church_id")
    result = await ResolveChurchAccessUseCase(uow).execute(context.account_id, church_id)

    if result.is_err():
        error = result.error
        if error.code in CHURCH_ACCESS_STATUS:
            if error.code == "CHURCH_ACCESS_DENIED":
                logger.warning(f"Account {context.account_id} denied access to church {church_id}")
            raise ClientError(error, status_code=CHURCH_ACCESS_STATUS[error.code])
        raise ServerError(error)

    return context.with_church(result.value)


async def require_church_admin(
    context: RequestContext = Depends(get_church_context),
) -> RequestContext:
    if context.church_role != ChurchRole.admin.value:
        logger.warning(
            f"Account {context.account_id} ({context.church_role}) denied an admin "
            f"operation on church {context.church_id}"
        )
        raise ClientError(
            Error("CHURCH_ADMIN_REQUIRED", "Only church administrators can perform this action"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return context


def resource_gate(collection: str, param: str):
    """
    Dependency factory binding the record named by path parameter `param`
    to the resolved church.

    A record of another church answers 404, exactly like a missing one.
    """

    async def dependency(
        request: Request,
        context: RequestContext = Depends(get_church_context),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ) -> RequestContext:
        resource_id = request.path_params.get(param)
        result = await LoadChurchResourceUseCase(uow).execute(
            collection, resource_id, context.church_id
        )

        if result.is_err():
            error = result.error
            if error.code in RESOURCE_STATUS:
                raise ClientError(error, status_code=RESOURCE_STATUS[error.code])
            raise ServerError(error)

        return context.with_resource(UUID(str(resource_id)), result.value)

    return dependency


def _enforce(result: Result[EntitlementDecision], context: RequestContext, message: str) -> None:
    if result.is_err():
        raise ServerError(result.error)

    decision = result.value
    if decision.allowed:
        return

    logger.info(
        f"Entitlement denied for account {context.account_id}: {decision.reason} "
        f"(plan {decision.current_plan})"
    )
    extra = {
        "reason": decision.reason,
        "action": decision.action,
        "currentPlan": decision.current_plan,
        "requiredPlan": decision.required_plan,
        "availablePlans": decision.available_plans,
    }
    raise ClientError(
        Error("SUBSCRIPTION_REQUIRED", message),
        status_code=status.HTTP_403_FORBIDDEN,
        extra={key: value for key, value in extra.items() if value is not None},
    )


async def enforce_entitlement(
    uow: UnitOfWork, context: RequestContext, action: str, church_id: Optional[UUID] = None
) -> None:
    """
    Raise a 403 ClientError unless the plan admits action.

    With church_id the church owner's plan and usage are evaluated.
    """
    result = await EvaluateEntitlementUseCase(uow).execute(
        context.account_id, action, church_id=church_id
    )
    _enforce(result, context, "Action not allowed with current subscription")


def require_entitlement(action: str):
    """Dependency factory checking an account-level plan entitlement"""

    async def dependency(
        context: RequestContext = Depends(get_request_context),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ) -> RequestContext:
        await enforce_entitlement(uow, context, action)
        return context

    return dependency


def require_church_entitlement(action: str):
    """Dependency factory checking a plan entitlement inside a church"""

    async def dependency(
        context: RequestContext = Depends(get_church_context),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ) -> RequestContext:
        await enforce_entitlement(uow, context, action, church_id=context.church_id)
        return context

    return dependency


def require_minimum_plan(required: PlanName):
    async def dependency(
        context: RequestContext = Depends(get_request_context),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ) -> RequestContext:
        result = await CheckMinimumPlanUseCase(uow).execute(context.account_id, required)
        _enforce(result, context, f"This action requires {required.value} subscription or higher")
        return context

    return dependency


async def require_active_subscription(
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> RequestContext:
    result = await CheckActiveSubscriptionUseCase(uow).execute(context.account_id)
    _enforce(result, context, "Active subscription required")
    return context
