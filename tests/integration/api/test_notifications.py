import pytest
from httpx import AsyncClient


@pytest.fixture
async def announced(client: AsyncClient, register, create_church, add_member, subscribe):
    """A starter church that sent one announcement to its members"""
    _, owner = await register("owner")
    member_id, member = await register("member")
    await subscribe(owner, "starter")
    church_id = await create_church(owner)
    await add_member(church_id, owner, member_id)

    response = await client.post(
        f"/notifications/churches/{church_id}/send",
        json={
            "title": "Harvest thanksgiving",
            "message": "Join us on Sunday",
            "priority": "high",
            "recipient_group": "members",
        },
        headers=owner,
    )
    assert response.status_code == 201, response.text
    return church_id, owner, member, response.json()["data"]


@pytest.mark.asyncio
async def test_members_group_reaches_linked_members(announced):
    _, _, _, sent = announced

    assert sent["sent"] == 1
    assert sent["delivered"] == 1


@pytest.mark.asyncio
async def test_mark_read_is_idempotent(client: AsyncClient, announced):
    _, _, member, _ = announced

    inbox = await client.get("/notifications", headers=member)
    assert inbox.status_code == 200
    items = inbox.json()["data"]["items"]
    assert len(items) == 1
    assert items[0]["priority"] == "high"
    assert items[0]["channels"] == ["in-app"]
    notification_id = items[0]["id"]

    unread = await client.get("/notifications/unread-count", headers=member)
    assert unread.json()["data"] == {"unread": 1}

    first = await client.put(f"/notifications/{notification_id}/read", headers=member)
    second = await client.put(f"/notifications/{notification_id}/read", headers=member)

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["data"]["read_at"] == second.json()["data"]["read_at"]

    unread = await client.get("/notifications/unread-count", headers=member)
    assert unread.json()["data"] == {"unread": 0}


@pytest.mark.asyncio
async def test_notifications_are_private_to_recipient(client: AsyncClient, announced):
    _, owner, member, _ = announced
    inbox = await client.get("/notifications", headers=member)
    notification_id = inbox.json()["data"]["items"][0]["id"]

    response = await client.put(f"/notifications/{notification_id}/read", headers=owner)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOTIFICATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_archived_notifications_are_hidden(client: AsyncClient, announced):
    _, _, member, _ = announced
    inbox = await client.get("/notifications", headers=member)
    notification_id = inbox.json()["data"]["items"][0]["id"]

    archived = await client.put(f"/notifications/{notification_id}/archive", headers=member)
    assert archived.json()["data"]["is_archived"] is True

    default = await client.get("/notifications", headers=member)
    everything = await client.get("/notifications", params={"include_archived": True}, headers=member)
    assert default.json()["data"]["items"] == []
    assert len(everything.json()["data"]["items"]) == 1


@pytest.mark.asyncio
async def test_specific_recipients_must_belong_to_church(client: AsyncClient, announced, register):
    church_id, owner, _, _ = announced
    outsider_id, _ = await register("outsider")

    response = await client.post(
        f"/notifications/churches/{church_id}/send",
        json={
            "title": "Private",
            "message": "Just for you",
            "recipient_group": "specific",
            "recipient_ids": [outsider_id],
        },
        headers=owner,
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_RECIPIENTS"
    assert error["details"]["recipient_ids"] == [outsider_id]


@pytest.mark.asyncio
async def test_only_church_admins_send(client: AsyncClient, announced):
    church_id, _, member, _ = announced

    response = await client.post(
        f"/notifications/churches/{church_id}/send",
        json={"title": "Hi", "message": "From a member"},
        headers=member,
    )

    assert response.status_code == 403
