from datetime import timedelta
from uuid import uuid4

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.domain.base import utcnow
from src.domain.entities import AccountSubscription, BillingCycle, PlanName, SubscriptionStatus


def _repository(*methods):
    repository = MagicMock()
    for method in methods:
        setattr(repository, method, AsyncMock())
    return repository


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with the repositories the access and plan checks touch"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.churches = _repository("get_by_id", "count_active_owned")
    uow.campaigns = _repository("count_open_by_owner")
    uow.church_relationships = _repository("get", "list_by_church", "count_admin_staff_by_owner")
    uow.volunteer_teams = _repository("count_active_by_owner")
    uow.members = _repository("get_active_by_account", "list_in_church", "get_in_church")
    uow.subscriptions = _repository("get_active", "get_latest", "create", "update")
    uow.notifications = _repository(
        "get_for_recipient", "update", "create_many", "mark_all_read", "delete"
    )
    uow.audit_events = _repository("create")
    uow.accounts = _repository("get_by_id")
    uow.donations = _repository("completed_totals_by_category", "completed_monthly_totals")
    uow.expenses = _repository("paid_totals_by_category", "committed_monthly_totals")
    uow.financial_records = _repository("verified_totals_by_category", "count_pending")

    for counter in (
        uow.churches.count_active_owned,
        uow.campaigns.count_open_by_owner,
        uow.church_relationships.count_admin_staff_by_owner,
        uow.volunteer_teams.count_active_by_owner,
    ):
        counter.return_value = 0

    uow.subscriptions.get_active.return_value = None
    uow.subscriptions.get_latest.return_value = None
    return uow


def _subscription(
    plan_name=PlanName.starter,
    status=SubscriptionStatus.active,
    days_left=20,
    account_id=None,
):
    now = utcnow()
    return AccountSubscription(
        account_id=account_id or uuid4(),
        plan_name=plan_name,
        status=status,
        billing_cycle=BillingCycle.monthly,
        current_period_start=now - timedelta(days=30 - days_left),
        current_period_end=now + timedelta(days=days_left),
        next_billing_date=now + timedelta(days=days_left),
    )


@pytest.fixture
def make_subscription():
    """Factory for subscriptions whose period ends days_left from now"""
    return _subscription

