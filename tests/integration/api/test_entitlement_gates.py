import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import AccountSubscription, SubscriptionStatus


@pytest.mark.asyncio
async def test_second_church_needs_upgrade(client: AsyncClient, register, create_church, subscribe, test_data):
    """The free plan holds one church; starter lifts the limit"""
    _, owner = await register("owner")
    await create_church(owner)

    denied = await client.post(
        "/churches", json=test_data.payload("church", name="Grace Annex"), headers=owner
    )

    assert denied.status_code == 403
    error = denied.json()["error"]
    assert error["code"] == "SUBSCRIPTION_REQUIRED"
    assert error["action"] == "upgrade_subscription"
    assert error["currentPlan"] == "free"
    assert error["requiredPlan"] == "starter"
    assert "reason" in error

    await subscribe(owner, "starter")

    allowed = await client.post(
        "/churches", json=test_data.payload("church", name="Grace Annex"), headers=owner
    )
    assert allowed.status_code == 201


@pytest.mark.asyncio
async def test_campaigns_are_not_on_free(client: AsyncClient, register, create_church):
    _, owner = await register("owner")
    church_id = await create_church(owner)

    response = await client.post(
        f"/churches/{church_id}/campaigns",
        json={"title": "Roof fund", "target_amount": 500000},
        headers=owner,
    )

    assert response.status_code == 403
    assert response.json()["error"]["requiredPlan"] == "starter"


@pytest.mark.asyncio
async def test_campaign_limit_follows_church_owner(
    client: AsyncClient, register, create_church, add_member, subscribe
):
    """A member creates campaigns against the owner's starter plan"""
    _, owner = await register("owner")
    member_id, member = await register("member")
    await subscribe(owner, "starter")
    church_id = await create_church(owner)
    await add_member(church_id, owner, member_id)

    response = await client.post(
        f"/churches/{church_id}/campaigns",
        json={"title": "Roof fund", "target_amount": 500000},
        headers=member,
    )

    assert response.status_code == 201
    assert response.json()["data"]["status"] == "draft"


@pytest.mark.asyncio
async def test_financial_summary_requires_starter(client: AsyncClient, register, create_church, subscribe):
    _, owner = await register("owner")
    church_id = await create_church(owner)

    denied = await client.get(f"/churches/{church_id}/financial-records/summary", headers=owner)
    assert denied.status_code == 403
    assert denied.json()["error"]["requiredPlan"] == "starter"

    await subscribe(owner, "starter")

    allowed = await client.get(f"/churches/{church_id}/financial-records/summary", headers=owner)
    assert allowed.status_code == 200
    summary = allowed.json()["data"]
    assert summary["total_income"] == 0
    assert summary["net"] == 0


@pytest.mark.asyncio
async def test_sending_notifications_needs_paid_plan(client: AsyncClient, register, create_church):
    _, owner = await register("owner")
    church_id = await create_church(owner)

    response = await client.post(
        f"/notifications/churches/{church_id}/send",
        json={"title": "Welcome", "message": "Hello church"},
        headers=owner,
    )

    assert response.status_code == 403
    error = response.json()["error"]
    assert error["action"] == "upgrade_subscription"
    assert error["availablePlans"] == ["starter", "organisation"]


@pytest.mark.asyncio
async def test_new_subscription_cancels_previous(client: AsyncClient, register, subscribe, db_session):
    _, owner = await register("owner")
    first = await subscribe(owner, "starter")
    second = await subscribe(owner, "organisation")

    rows = (await db_session.exec(select(AccountSubscription))).all()
    statuses = {str(row.id): row.status for row in rows}

    assert statuses == {
        first["id"]: SubscriptionStatus.cancelled,
        second["id"]: SubscriptionStatus.active,
    }

    current = await client.get("/subscriptions/current", headers=owner)
    assert current.json()["data"]["plan"]["name"] == "organisation"


@pytest.mark.asyncio
async def test_reactivating_team_counts_against_plan(client: AsyncClient, register, create_church):
    """The free plan holds one active team, however it became active"""
    _, owner = await register("owner")
    church_id = await create_church(owner)
    teams = f"/churches/{church_id}/volunteer-teams"

    first = await client.post(teams, json={"name": "Ushers"}, headers=owner)
    assert first.status_code == 201
    first_id = first.json()["data"]["id"]

    deactivated = await client.post(f"{teams}/{first_id}/deactivate", headers=owner)
    assert deactivated.json()["data"]["is_active"] is False

    second = await client.post(teams, json={"name": "Choir"}, headers=owner)
    assert second.status_code == 201

    updated = await client.put(
        f"{teams}/{first_id}", json={"name": "Greeters", "is_active": True}, headers=owner
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["name"] == "Greeters"
    assert updated.json()["data"]["is_active"] is False

    reactivated = await client.post(f"{teams}/{first_id}/activate", headers=owner)
    assert reactivated.status_code == 403
    assert reactivated.json()["error"]["code"] == "SUBSCRIPTION_REQUIRED"

    active = await client.get(teams, params={"is_active": True}, headers=owner)
    assert [team["name"] for team in active.json()["data"]["items"]] == ["Choir"]


@pytest.mark.asyncio
async def test_staff_are_always_admins(client: AsyncClient, register, create_church, subscribe):
    """Staff grants admin access, so every addition is checked against the plan"""
    _, owner = await register("owner")
    member_id, _ = await register("member")
    church_id = await create_church(owner)
    staff_url = f"/churches/{church_id}/staff"

    volunteer = await client.post(
        staff_url, json={"email": "tunde@example.com", "role": "volunteer"}, headers=owner
    )
    assert volunteer.status_code == 400
    assert volunteer.json()["error"]["code"] == "VALIDATION_FAILED"

    denied = await client.post(staff_url, json={"email": "tunde@example.com"}, headers=owner)
    assert denied.status_code == 403
    assert denied.json()["error"]["requiredPlan"] == "starter"

    await subscribe(owner, "starter")
    added = await client.post(staff_url, json={"email": "tunde@example.com"}, headers=owner)
    assert added.status_code == 201
    assert added.json()["data"]["account_id"] == member_id
    assert added.json()["data"]["role"] == "admin"
