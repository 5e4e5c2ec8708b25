from datetime import timedelta

import pytest
from httpx import AsyncClient

from src.api.utils.jwt import create_access_token


@pytest.mark.asyncio
async def test_public_routes_need_no_credentials(client: AsyncClient):
    health = await client.get("/health")
    plans = await client.get("/subscriptions/plans")

    assert health.json()["data"]["status"] == "healthy"
    assert [plan["name"] for plan in plans.json()["data"]] == ["free", "starter", "organisation"]


@pytest.mark.asyncio
async def test_missing_credentials(client: AsyncClient):
    """No Authorization header and no cookie: 401 before anything else runs"""
    response = await client.get("/auth/me")

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "MISSING_TOKEN"


@pytest.mark.asyncio
async def test_garbage_token(client: AsyncClient):
    response = await client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_session_cookie_authenticates(client: AsyncClient, test_data):
    await client.post("/auth/register", json=test_data.account("member"))

    response = await client.get("/auth/me")

    assert response.status_code == 200
    assert response.json()["data"]["email"] == "tunde@example.com"


@pytest.mark.asyncio
async def test_member_cannot_reach_admin_routes(client: AsyncClient, register):
    _, headers = await register("member")

    response = await client.get("/auth/users", headers=headers)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_global_admin_lists_accounts(client: AsyncClient, register, promote_to_admin):
    account_id, headers = await register("owner")
    await register("member")
    await promote_to_admin(account_id)

    response = await client.get("/auth/users", headers=headers)

    assert response.status_code == 200
    page = response.json()["data"]
    assert page["pagination"]["total"] == 2
    assert page["pagination"]["limit"] == 10


@pytest.mark.asyncio
async def test_outsider_is_denied_church(client: AsyncClient, register, create_church):
    _, owner = await register("owner")
    _, outsider = await register("outsider")
    church_id = await create_church(owner)

    response = await client.get(f"/churches/{church_id}/members", headers=outsider)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "CHURCH_ACCESS_DENIED"


@pytest.mark.asyncio
async def test_malformed_church_id(client: AsyncClient, register):
    _, headers = await register("owner")

    response = await client.get("/churches/not-a-uuid/members", headers=headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_CHURCH_ID"


@pytest.mark.asyncio
async def test_linked_member_gets_member_role(client: AsyncClient, register, create_church, add_member):
    _, owner = await register("owner")
    member_id, member = await register("member")
    church_id = await create_church(owner)
    await add_member(church_id, owner, member_id)

    listing = await client.get(f"/churches/{church_id}/members", headers=member)
    assert listing.status_code == 200

    expense = await client.post(
        f"/churches/{church_id}/expenses",
        json={"title": "Chairs", "amount": 1000, "category": "furniture"},
        headers=member,
    )
    assert expense.status_code == 201

    approve = await client.post(
        f"/churches/{church_id}/expenses/{expense.json()['data']['id']}/approve",
        json={},
        headers=member,
    )
    assert approve.status_code == 403
    assert approve.json()["error"]["code"] == "CHURCH_ADMIN_REQUIRED"


@pytest.mark.asyncio
async def test_record_of_other_church_is_not_found(client: AsyncClient, register, create_church, test_data):
    """A valid id from another tenant answers exactly like a missing one"""
    _, owner = await register("owner")
    _, other_owner = await register("outsider")
    church_a = await create_church(owner)
    church_b = await create_church(other_owner, name="Hope Assembly")

    expense = await client.post(
        f"/churches/{church_a}/expenses", json=test_data.get_copy("expense"), headers=owner
    )
    expense_id = expense.json()["data"]["id"]

    response = await client.get(f"/churches/{church_b}/expenses/{expense_id}", headers=other_owner)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"

    own = await client.get(f"/churches/{church_a}/expenses/{expense_id}", headers=owner)
    assert own.status_code == 200
    assert own.json()["data"]["church_id"] == church_a


@pytest.mark.asyncio
async def test_expired_token(client: AsyncClient, register):
    account_id, _ = await register("member")
    token = create_access_token(account_id, "member", expires_delta=timedelta(seconds=-1))

    response = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_deactivated_account_token_stops_working(client: AsyncClient, register, promote_to_admin):
    admin_id, admin = await register("owner")
    member_id, member = await register("member")
    await promote_to_admin(admin_id)

    deactivated = await client.post(f"/auth/users/{member_id}/deactivate", headers=admin)
    assert deactivated.status_code == 200

    response = await client.get("/auth/me", headers=member)

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "ACCOUNT_DISABLED"


@pytest.mark.asyncio
async def test_public_church_profile_ignores_bad_token(client: AsyncClient, register, create_church):
    _, owner = await register("owner")
    church_id = await create_church(owner)

    anonymous = await client.get(
        f"/churches/{church_id}", headers={"Authorization": "Bearer not-a-jwt"}
    )
    admin_view = await client.get(f"/churches/{church_id}", headers=owner)

    assert anonymous.status_code == 200
    assert anonymous.json()["data"]["settings"] is None
    assert anonymous.json()["data"]["my_role"] is None
    assert admin_view.json()["data"]["settings"] is not None
