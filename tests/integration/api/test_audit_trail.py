from uuid import UUID

import pytest

from src.adapter.repositories.audit_event_repository import AuditEventRepository


@pytest.mark.asyncio
async def test_account_events_are_recorded(register, subscribe, db_session):
    account_id, owner = await register("owner")
    first = await subscribe(owner, "starter")
    await subscribe(owner, "organisation")

    events = AuditEventRepository(db_session)
    started = await events.list_for_account(UUID(account_id), action="subscription_started")

    by_plan = {e.event_metadata["plan"]: e.event_metadata for e in started}
    assert set(by_plan) == {"starter", "organisation"}
    assert by_plan["starter"]["replaced"] is None
    assert by_plan["organisation"]["replaced"] == first["id"]
    assert len(await events.list_for_account(UUID(account_id), action="register")) == 1


@pytest.mark.asyncio
async def test_church_creation_is_recorded(register, create_church, db_session):
    account_id, owner = await register("owner")
    church_id = await create_church(owner)

    events = await AuditEventRepository(db_session).list_for_church(UUID(church_id))

    assert [e.action for e in events] == ["church_created"]
    assert events[0].account_id == UUID(account_id)
    assert events[0].event_metadata == {"name": "Grace Chapel"}


@pytest.mark.asyncio
async def test_account_reads_its_own_trail(client, register, subscribe):
    _, owner = await register("owner")
    await subscribe(owner, "starter")

    response = await client.get("/auth/me/audit-events", headers=owner)

    assert response.status_code == 200
    events = response.json()["data"]
    assert [e["action"] for e in events] == ["subscription_started", "register"]
    assert events[0]["account_email"] == "grace@example.com"
    assert events[0]["metadata"]["plan"] == "starter"

    narrowed = await client.get(
        "/auth/me/audit-events", params={"action": "register", "limit": 1}, headers=owner
    )
    assert [e["action"] for e in narrowed.json()["data"]] == ["register"]


@pytest.mark.asyncio
async def test_church_trail_is_for_admins(client, register, create_church, add_member):
    _, owner = await register("owner")
    member_id, member = await register("member")
    church_id = await create_church(owner)
    await add_member(church_id, owner, member_id)

    denied = await client.get(f"/churches/{church_id}/audit-events", headers=member)
    assert denied.status_code == 403

    response = await client.get(f"/churches/{church_id}/audit-events", headers=owner)
    assert response.status_code == 200
    actions = [e["action"] for e in response.json()["data"]]
    assert actions[-1] == "church_created"
    assert all(e["church_id"] == church_id for e in response.json()["data"])


@pytest.mark.asyncio
async def test_audit_limit_is_bounded(client, register):
    _, owner = await register("owner")

    response = await client.get("/auth/me/audit-events", params={"limit": 500}, headers=owner)

    assert response.status_code == 400
