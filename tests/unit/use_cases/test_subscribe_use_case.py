from uuid import uuid4

import pytest

from src.app.use_cases.subscriptions import SubscribeCommand, SubscribeUseCase
from src.domain.entities import BillingCycle, PaymentMethod, PlanName, SubscriptionStatus


@pytest.fixture
def saving_uow(mock_uow):
    mock_uow.subscriptions.create.side_effect = lambda subscription: subscription
    mock_uow.subscriptions.update.side_effect = lambda subscription: subscription
    return mock_uow


@pytest.mark.asyncio
async def test_paid_plan_requires_payment_method(saving_uow):
    command = SubscribeCommand(plan_name=PlanName.starter)

    result = await SubscribeUseCase(saving_uow).execute(uuid4(), command)

    assert result.error.code == "PAYMENT_METHOD_REQUIRED"
    saving_uow.subscriptions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_subscribe_starts_paid_period(saving_uow):
    account_id = uuid4()
    command = SubscribeCommand(
        plan_name=PlanName.starter,
        billing_cycle=BillingCycle.yearly,
        payment_method=PaymentMethod.card,
    )

    result = await SubscribeUseCase(saving_uow).execute(account_id, command)

    assert result.is_ok()
    assert result.value.plan_name == "starter"
    assert result.value.status == "active"
    assert (result.value.current_period_end - result.value.current_period_start).days == 365

    created = saving_uow.subscriptions.create.call_args.args[0]
    assert created.account_id == account_id
    assert created.billing_history[0]["amount"] == 30000
    assert created.billing_history[0]["status"] == "paid"
    saving_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_subscribe_cancels_previous_subscription(saving_uow, make_subscription):
    account_id = uuid4()
    previous = make_subscription(PlanName.starter, account_id=account_id)
    saving_uow.subscriptions.get_active.return_value = previous
    command = SubscribeCommand(plan_name=PlanName.organisation, payment_method=PaymentMethod.card)

    result = await SubscribeUseCase(saving_uow).execute(account_id, command)

    assert result.value.plan_name == "organisation"
    assert previous.status == SubscriptionStatus.cancelled
    assert previous.auto_renew is False
    assert "organisation" in previous.cancellation["reason"]
    saving_uow.subscriptions.update.assert_awaited_once_with(previous)


@pytest.mark.asyncio
async def test_same_current_plan_is_a_conflict(saving_uow, make_subscription):
    saving_uow.subscriptions.get_active.return_value = make_subscription(PlanName.starter)
    command = SubscribeCommand(plan_name=PlanName.starter, payment_method=PaymentMethod.card)

    result = await SubscribeUseCase(saving_uow).execute(uuid4(), command)

    assert result.error.code == "ALREADY_SUBSCRIBED"


@pytest.mark.asyncio
async def test_plan_must_fit_current_usage(saving_uow, make_subscription):
    saving_uow.subscriptions.get_active.return_value = make_subscription(PlanName.starter)
    saving_uow.churches.count_active_owned.return_value = 2

    result = await SubscribeUseCase(saving_uow).execute(
        uuid4(), SubscribeCommand(plan_name=PlanName.free)
    )

    assert result.error.code == "PLAN_LIMITS_EXCEEDED"
    assert result.error.details["problems"] == ["You have 2 churches but Free Plan allows 1"]
    saving_uow.commit.assert_not_awaited()
