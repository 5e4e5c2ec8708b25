from uuid import uuid4

from src.domain.entities import BillingCycle, ExpenseStatus, PlanName
from src.domain.lifecycle import (
    CAMPAIGN_TRANSITIONS,
    EXPENSE_TRANSITIONS,
    append_status_history,
    can_transition,
)
from src.domain.plans import (
    CREATE_CAMPAIGN,
    CREATE_CHURCH,
    get_plan,
    lowest_plan_admitting,
    paid_plan_names,
    plans_in_order,
)


def test_plans_are_ordered_by_ordinal():
    assert [plan.name for plan in plans_in_order()] == [
        PlanName.free,
        PlanName.starter,
        PlanName.organisation,
    ]
    assert paid_plan_names() == ["starter", "organisation"]


def test_yearly_price_is_ten_months():
    starter = get_plan(PlanName.starter)

    assert starter.price_for(BillingCycle.monthly) == 3000
    assert starter.price_for(BillingCycle.yearly) == 30000


def test_lowest_plan_admitting_one_more():
    assert lowest_plan_admitting(CREATE_CHURCH, 0).name == PlanName.free
    assert lowest_plan_admitting(CREATE_CHURCH, 1).name == PlanName.starter
    assert lowest_plan_admitting(CREATE_CHURCH, 3).name == PlanName.organisation
    assert lowest_plan_admitting(CREATE_CAMPAIGN, 0).name == PlanName.starter


def test_expense_must_be_approved_before_paid():
    assert can_transition(EXPENSE_TRANSITIONS, ExpenseStatus.pending, ExpenseStatus.approved)
    assert not can_transition(EXPENSE_TRANSITIONS, ExpenseStatus.pending, ExpenseStatus.paid)
    assert can_transition(EXPENSE_TRANSITIONS, ExpenseStatus.approved, ExpenseStatus.paid)


def test_terminal_statuses_have_no_exits():
    for transitions in (EXPENSE_TRANSITIONS, CAMPAIGN_TRANSITIONS):
        terminal = [status for status, targets in transitions.items() if not targets]
        assert terminal
        for status in terminal:
            assert not any(can_transition(transitions, status, target) for target in transitions)


def test_status_history_is_appended_to_a_new_list():
    actor = uuid4()
    history = [{"from": "pending", "to": "approved"}]

    updated = append_status_history(
        history, ExpenseStatus.approved, ExpenseStatus.paid, actor, "Paid by transfer"
    )

    assert len(history) == 1
    assert updated[:1] == history
    assert updated[-1]["from"] == "approved"
    assert updated[-1]["to"] == "paid"
    assert updated[-1]["changed_by"] == str(actor)
    assert updated[-1]["reason"] == "Paid by transfer"
