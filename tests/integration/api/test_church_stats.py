from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient


@pytest_asyncio.fixture
async def funded_church(client: AsyncClient, register, create_church, subscribe, test_data):
    """A starter church with members, donations and expenses in every state"""
    _, owner = await register("owner")
    await subscribe(owner, "starter")
    church_id = await create_church(owner)
    base = f"/churches/{church_id}"

    for index, role in enumerate(["member", "volunteer", "volunteer"]):
        await client.post(
            f"{base}/members",
            json={"first_name": f"Person{index}", "last_name": "Test", "role": role},
            headers=owner,
        )

    for amount, category, status in [
        (5000, "tithe", "completed"),
        (20000, "building", "completed"),
        (1000, None, "completed"),
        (7000, "tithe", "completed"),
        (9000, "tithe", "pending"),
    ]:
        response = await client.post(
            f"{base}/donations",
            json={"amount": amount, "category": category, "status": status},
            headers=owner,
        )
        assert response.status_code == 201, response.text

    approved = await client.post(f"{base}/expenses", json=test_data.get_copy("expense"), headers=owner)
    await client.post(
        f"{base}/expenses/{approved.json()['data']['id']}/approve", json={}, headers=owner
    )
    await client.post(
        f"{base}/expenses",
        json=test_data.payload("expense", title="New chairs", category="furniture"),
        headers=owner,
    )
    return church_id, owner


@pytest.mark.asyncio
async def test_church_overview_counts(client: AsyncClient, funded_church):
    church_id, owner = funded_church

    response = await client.get(f"/churches/{church_id}/stats", headers=owner)

    assert response.status_code == 200
    stats = response.json()["data"]
    assert stats["active_members"] == 3
    assert stats["active_volunteers"] == 2
    assert stats["total_donations"] == 33000
    assert stats["total_expenses"] == 45000
    assert "generated_at" in stats


@pytest.mark.asyncio
async def test_donation_stats_by_category(client: AsyncClient, funded_church):
    church_id, owner = funded_church
    month = datetime.now(timezone.utc).strftime("%Y-%m")

    response = await client.get(f"/churches/{church_id}/donations/stats", headers=owner)

    assert response.status_code == 200
    stats = response.json()["data"]
    assert stats["total"] == 33000
    assert stats["count"] == 4
    assert [c["category"] for c in stats["categories"]] == ["building", "tithe", "general"]
    tithe = stats["categories"][1]
    assert tithe["total"] == 12000
    assert tithe["monthly"] == [{"month": month, "total": 12000, "count": 2}]


@pytest.mark.asyncio
async def test_expense_stats_count_committed_money(client: AsyncClient, funded_church):
    church_id, owner = funded_church

    response = await client.get(f"/churches/{church_id}/expenses/stats", headers=owner)

    stats = response.json()["data"]
    assert stats["total"] == 45000
    assert [c["category"] for c in stats["categories"]] == ["maintenance"]


@pytest.mark.asyncio
async def test_stats_period_excludes_older_records(client: AsyncClient, funded_church):
    church_id, owner = funded_church

    response = await client.get(
        f"/churches/{church_id}/donations/stats",
        params={"end_date": "2020-01-01T00:00:00Z"},
        headers=owner,
    )

    assert response.json()["data"]["categories"] == []
    assert response.json()["data"]["total"] == 0


@pytest.mark.asyncio
async def test_record_stats_need_starter(client: AsyncClient, register, create_church):
    _, owner = await register("owner")
    church_id = await create_church(owner)

    response = await client.get(f"/churches/{church_id}/expenses/stats", headers=owner)

    assert response.status_code == 403
    assert response.json()["error"]["requiredPlan"] == "starter"


@pytest.mark.asyncio
async def test_service_and_category_entries_are_updated_in_place(
    client: AsyncClient, register, create_church
):
    _, owner = await register("owner")
    church_id = await create_church(owner)
    base = f"/churches/{church_id}"

    service = await client.post(
        f"{base}/services",
        json={"name": "Sunday service", "day": "sunday", "start_time": "09:00"},
        headers=owner,
    )
    service_id = service.json()["data"]["services"][0]["id"]

    moved = await client.put(
        f"{base}/services/{service_id}", json={"start_time": "10:30"}, headers=owner
    )
    assert moved.status_code == 200
    [entry] = moved.json()["data"]["services"]
    assert entry == {**service.json()["data"]["services"][0], "start_time": "10:30"}

    missing = await client.put(f"{base}/services/unknown", json={"day": "monday"}, headers=owner)
    assert missing.status_code == 404

    for name in ("Tithe", "Building"):
        added = await client.post(f"{base}/donation-categories", json={"name": name}, headers=owner)
    building_id = added.json()["data"]["donation_categories"][1]["id"]

    clash = await client.put(
        f"{base}/donation-categories/{building_id}", json={"name": "tithe"}, headers=owner
    )
    assert clash.status_code == 409

    retired = await client.put(
        f"{base}/donation-categories/{building_id}",
        json={"name": "Building fund", "is_active": False},
        headers=owner,
    )
    assert retired.status_code == 200
    building = retired.json()["data"]["donation_categories"][1]
    assert building["name"] == "Building fund"
    assert building["is_active"] is False
