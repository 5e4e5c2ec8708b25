from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from src.app.use_cases.subscriptions import EvaluateEntitlementUseCase
from src.domain.entities import PlanName
from src.domain.plans import (
    CREATE_CAMPAIGN,
    CREATE_CHURCH,
    CREATE_VOLUNTEER_TEAM,
    MAKE_DONATIONS,
)


@pytest.mark.asyncio
async def test_free_account_with_one_church_cannot_create_another(mock_uow):
    """The free plan admits a single church; the hint names starter"""
    mock_uow.churches.count_active_owned.return_value = 1

    result = await EvaluateEntitlementUseCase(mock_uow).execute(uuid4(), CREATE_CHURCH)

    assert result.is_ok()
    decision = result.value
    assert decision.allowed is False
    assert decision.action == "upgrade_subscription"
    assert decision.current_plan == "free"
    assert decision.required_plan == "starter"
    assert decision.limit == 1
    assert decision.current == 1


@pytest.mark.asyncio
async def test_first_church_is_allowed_on_free(mock_uow):
    result = await EvaluateEntitlementUseCase(mock_uow).execute(uuid4(), CREATE_CHURCH)

    assert result.value.allowed is True
    assert result.value.current == 0


@pytest.mark.asyncio
async def test_starter_admits_second_church(mock_uow, make_subscription):
    mock_uow.subscriptions.get_active.return_value = make_subscription(PlanName.starter)
    mock_uow.churches.count_active_owned.return_value = 1

    result = await EvaluateEntitlementUseCase(mock_uow).execute(uuid4(), CREATE_CHURCH)

    assert result.value.allowed is True
    assert result.value.current_plan == "starter"
    assert result.value.limit == 3


@pytest.mark.asyncio
async def test_starter_at_limit_points_to_organisation(mock_uow, make_subscription):
    mock_uow.subscriptions.get_active.return_value = make_subscription(PlanName.starter)
    mock_uow.churches.count_active_owned.return_value = 3

    result = await EvaluateEntitlementUseCase(mock_uow).execute(uuid4(), CREATE_CHURCH)

    assert result.value.allowed is False
    assert result.value.required_plan == "organisation"


@pytest.mark.asyncio
async def test_free_plan_does_not_include_campaigns(mock_uow):
    result = await EvaluateEntitlementUseCase(mock_uow).execute(uuid4(), CREATE_CAMPAIGN)

    decision = result.value
    assert decision.allowed is False
    assert decision.limit == 0
    assert "does not include" in decision.reason
    assert decision.required_plan == "starter"


@pytest.mark.asyncio
async def test_organisation_is_unlimited(mock_uow, make_subscription):
    mock_uow.subscriptions.get_active.return_value = make_subscription(PlanName.organisation)
    mock_uow.volunteer_teams.count_active_by_owner.return_value = 250

    result = await EvaluateEntitlementUseCase(mock_uow).execute(uuid4(), CREATE_VOLUNTEER_TEAM)

    assert result.value.allowed is True
    assert result.value.limit is None


@pytest.mark.asyncio
async def test_lapsed_subscription_counts_as_free(mock_uow, make_subscription):
    """An active row whose period already ended grants nothing beyond free"""
    mock_uow.subscriptions.get_active.return_value = make_subscription(
        PlanName.organisation, days_left=-1
    )
    mock_uow.churches.count_active_owned.return_value = 1

    result = await EvaluateEntitlementUseCase(mock_uow).execute(uuid4(), CREATE_CHURCH)

    assert result.value.allowed is False
    assert result.value.current_plan == "free"


@pytest.mark.asyncio
async def test_church_scoped_action_uses_church_owner(mock_uow, make_subscription):
    caller_id = uuid4()
    owner_id = uuid4()
    church_id = uuid4()
    mock_uow.churches.get_by_id.return_value = MagicMock(owner_id=owner_id)
    mock_uow.subscriptions.get_active.return_value = make_subscription(
        PlanName.starter, account_id=owner_id
    )

    result = await EvaluateEntitlementUseCase(mock_uow).execute(
        caller_id, CREATE_CAMPAIGN, church_id=church_id
    )

    assert result.value.allowed is True
    mock_uow.subscriptions.get_active.assert_awaited_once_with(owner_id)
    mock_uow.campaigns.count_open_by_owner.assert_awaited_once_with(owner_id)


@pytest.mark.asyncio
async def test_free_tier_generic_actions(mock_uow):
    use_case = EvaluateEntitlementUseCase(mock_uow)

    donations = await use_case.execute(uuid4(), MAKE_DONATIONS)
    reports = await use_case.execute(uuid4(), "financial_reports")

    assert donations.value.allowed is True
    assert reports.value.allowed is False
    assert reports.value.required_plan == "starter"


@pytest.mark.asyncio
async def test_paid_plan_allows_listed_feature(mock_uow, make_subscription):
    mock_uow.subscriptions.get_active.return_value = make_subscription(PlanName.starter)

    result = await EvaluateEntitlementUseCase(mock_uow).execute(uuid4(), "send_notifications")

    assert result.value.allowed is True
    # Counters are only read for limited actions
    mock_uow.churches.count_active_owned.assert_not_awaited()


@pytest.mark.asyncio
async def test_lookup_failure_is_an_error_not_an_allow(mock_uow):
    mock_uow.subscriptions.get_active.side_effect = OperationalError("SELECT", {}, Exception("down"))

    result = await EvaluateEntitlementUseCase(mock_uow).execute(uuid4(), CREATE_CHURCH)

    assert result.is_err()
    assert result.error.code == "ENTITLEMENT_LOOKUP_FAILED"
