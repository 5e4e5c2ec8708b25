from uuid import uuid4

from sqlalchemy.exc import OperationalError

import pytest

from src.app.use_cases.subscriptions import (
    CheckActiveSubscriptionUseCase,
    CheckMinimumPlanUseCase,
    GetSubscriptionInfoUseCase,
)
from src.domain.entities import PlanName, SubscriptionStatus


# ============================================================================
# Minimum plan
# ============================================================================


@pytest.mark.asyncio
async def test_free_account_below_starter(mock_uow):
    result = await CheckMinimumPlanUseCase(mock_uow).execute(uuid4(), PlanName.starter)

    decision = result.value
    assert decision.allowed is False
    assert decision.current_plan == "free"
    assert decision.required_plan == "starter"
    assert decision.action == "upgrade_subscription"


@pytest.mark.asyncio
async def test_higher_plan_satisfies_minimum(mock_uow, make_subscription):
    mock_uow.subscriptions.get_active.return_value = make_subscription(PlanName.organisation)

    result = await CheckMinimumPlanUseCase(mock_uow).execute(uuid4(), PlanName.starter)

    assert result.value.allowed is True
    assert result.value.current_plan == "organisation"


@pytest.mark.asyncio
async def test_starter_below_organisation(mock_uow, make_subscription):
    mock_uow.subscriptions.get_active.return_value = make_subscription(PlanName.starter)

    result = await CheckMinimumPlanUseCase(mock_uow).execute(uuid4(), PlanName.organisation)

    assert result.value.allowed is False
    assert "you are on the Starter Plan" in result.value.reason


# ============================================================================
# Active subscription
# ============================================================================


@pytest.mark.asyncio
async def test_no_subscription_lists_paid_plans(mock_uow):
    result = await CheckActiveSubscriptionUseCase(mock_uow).execute(uuid4())

    decision = result.value
    assert decision.allowed is False
    assert decision.action == "upgrade_subscription"
    assert decision.available_plans == ["starter", "organisation"]


@pytest.mark.asyncio
async def test_free_subscription_is_not_paid(mock_uow, make_subscription):
    mock_uow.subscriptions.get_latest.return_value = make_subscription(PlanName.free)

    result = await CheckActiveSubscriptionUseCase(mock_uow).execute(uuid4())

    assert result.value.allowed is False
    assert result.value.action == "upgrade_subscription"


@pytest.mark.asyncio
async def test_cancelled_subscription_must_be_renewed(mock_uow, make_subscription):
    mock_uow.subscriptions.get_latest.return_value = make_subscription(
        PlanName.starter, status=SubscriptionStatus.cancelled
    )

    result = await CheckActiveSubscriptionUseCase(mock_uow).execute(uuid4())

    assert result.value.allowed is False
    assert result.value.action == "renew_subscription"
    assert result.value.current_plan == "starter"


@pytest.mark.asyncio
async def test_ended_period_must_be_renewed(mock_uow, make_subscription):
    mock_uow.subscriptions.get_latest.return_value = make_subscription(
        PlanName.organisation, days_left=-2
    )

    result = await CheckActiveSubscriptionUseCase(mock_uow).execute(uuid4())

    assert result.value.action == "renew_subscription"


@pytest.mark.asyncio
async def test_active_paid_subscription_is_allowed(mock_uow, make_subscription):
    mock_uow.subscriptions.get_latest.return_value = make_subscription(PlanName.starter)

    result = await CheckActiveSubscriptionUseCase(mock_uow).execute(uuid4())

    assert result.value.allowed is True


# ============================================================================
# Displayed plan
# ============================================================================


@pytest.mark.asyncio
async def test_subscription_info_falls_back_to_free_on_lookup_error(mock_uow):
    mock_uow.subscriptions.get_active.side_effect = OperationalError("select", {}, Exception("gone"))

    result = await GetSubscriptionInfoUseCase(mock_uow).execute(uuid4())

    assert result.is_ok()
    assert result.value.is_free is True
    assert result.value.plan.name == "free"
    assert result.value.subscription is None


@pytest.mark.asyncio
async def test_subscription_info_shows_current_paid_plan(mock_uow, make_subscription):
    mock_uow.subscriptions.get_active.return_value = make_subscription(PlanName.organisation)

    result = await GetSubscriptionInfoUseCase(mock_uow).execute(uuid4())

    assert result.value.is_free is False
    assert result.value.subscription.plan_name == "organisation"
