from datetime import datetime, timedelta
from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlalchemy import update

from src.domain.base import utcnow
from src.domain.entities import AccountSubscription


@pytest.mark.asyncio
async def test_cancelled_subscription_is_renewed_with_fresh_period(
    client: AsyncClient, register, subscribe
):
    _, owner = await register("owner")
    await subscribe(owner, "starter")

    cancelled = await client.put("/subscriptions/cancel", json={"reason": "Budget"}, headers=owner)
    assert cancelled.status_code == 200
    assert cancelled.json()["data"]["reason"] == "Budget"

    renewed = await client.put("/subscriptions/renew", json={"billing_cycle": "yearly"}, headers=owner)

    assert renewed.status_code == 200
    subscription = renewed.json()["data"]
    assert subscription["status"] == "active"
    assert subscription["billing_cycle"] == "yearly"
    start = datetime.fromisoformat(subscription["current_period_start"])
    end = datetime.fromisoformat(subscription["current_period_end"])
    assert end - start == timedelta(days=365)


@pytest.mark.asyncio
async def test_renew_without_subscription(client: AsyncClient, register):
    _, owner = await register("owner")

    response = await client.put("/subscriptions/renew", headers=owner)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NO_SUBSCRIPTION"


@pytest.mark.asyncio
async def test_downgrade_is_refused_above_target_limits(
    client: AsyncClient, register, subscribe, create_church
):
    _, owner = await register("owner")
    await subscribe(owner, "starter")
    await create_church(owner, name="Grace Chapel")
    await create_church(owner, name="Hope Assembly")

    response = await client.put("/subscriptions/upgrade", json={"plan_name": "free"}, headers=owner)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "DOWNGRADE_EXCEEDS_USAGE"
    assert error["details"]["problems"] == ["You have 2 churches but Free Plan allows 1"]

    current = await client.get("/subscriptions/current", headers=owner)
    assert current.json()["data"]["plan"]["name"] == "starter"


@pytest.mark.asyncio
async def test_admin_expires_lapsed_subscriptions(
    client: AsyncClient, register, subscribe, promote_to_admin, db_session
):
    admin_id, admin = await register("outsider")
    _, owner = await register("owner")
    await promote_to_admin(admin_id)
    subscription = await subscribe(owner, "starter")

    await db_session.execute(
        update(AccountSubscription)
        .where(AccountSubscription.id == UUID(subscription["id"]))
        .values(current_period_end=utcnow() - timedelta(days=1))
    )
    await db_session.commit()

    forbidden = await client.post("/subscriptions/expire-lapsed", headers=owner)
    assert forbidden.status_code == 403

    response = await client.post("/subscriptions/expire-lapsed", headers=admin)

    assert response.status_code == 200
    assert response.json()["data"] == {"expired": 1}

    current = await client.get("/subscriptions/current", headers=owner)
    assert current.json()["data"]["is_free"] is True
    assert current.json()["data"]["subscription"] is None
