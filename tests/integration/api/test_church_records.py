from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient


@pytest.fixture
async def church(register, create_church):
    _, owner = await register("owner")
    church_id = await create_church(owner)
    return church_id, owner


@pytest.mark.asyncio
async def test_expense_review_workflow(client: AsyncClient, church, test_data):
    church_id, owner = church
    created = await client.post(
        f"/churches/{church_id}/expenses", json=test_data.get_copy("expense"), headers=owner
    )
    assert created.status_code == 201
    expense = created.json()["data"]
    assert expense["status"] == "pending"
    base = f"/churches/{church_id}/expenses/{expense['id']}"

    premature = await client.post(f"{base}/pay", json={}, headers=owner)
    assert premature.status_code == 409
    error = premature.json()["error"]
    assert error["code"] == "INVALID_STATUS_TRANSITION"
    assert error["details"] == {"from": "pending", "to": "paid"}

    approved = await client.post(
        f"{base}/approve", json={"approved_amount": 40000, "reason": "Negotiated"}, headers=owner
    )
    assert approved.status_code == 200
    assert approved.json()["data"]["approved_amount"] == 40000

    paid = await client.post(f"{base}/pay", json={"payment_method": "transfer"}, headers=owner)
    assert paid.status_code == 200
    data = paid.json()["data"]
    assert data["status"] == "paid"
    assert [(h["from"], h["to"]) for h in data["status_history"]] == [
        ("pending", "approved"),
        ("approved", "paid"),
    ]
    assert data["status_history"][0]["reason"] == "Negotiated"

    locked = await client.put(base, json={"title": "Generator overhaul"}, headers=owner)
    assert locked.status_code == 409
    assert locked.json()["error"]["code"] == "EXPENSE_LOCKED"


@pytest.mark.asyncio
async def test_paid_expense_enters_summary(client: AsyncClient, church, subscribe, test_data):
    church_id, owner = church
    await subscribe(owner, "starter")
    expense = await client.post(
        f"/churches/{church_id}/expenses", json=test_data.get_copy("expense"), headers=owner
    )
    base = f"/churches/{church_id}/expenses/{expense.json()['data']['id']}"
    await client.post(f"{base}/approve", json={}, headers=owner)
    await client.post(f"{base}/pay", json={}, headers=owner)

    record = await client.post(
        f"/churches/{church_id}/financial-records",
        json={
            "record_type": "income",
            "category": "offering",
            "amount": 100000,
            "record_date": "2024-05-05T10:00:00Z",
        },
        headers=owner,
    )
    assert record.status_code == 201
    record_id = record.json()["data"]["id"]

    pending = await client.get(f"/churches/{church_id}/financial-records/summary", headers=owner)
    assert pending.json()["data"]["pending_records"] == 1
    assert pending.json()["data"]["total_income"] == 0

    verified = await client.post(
        f"/churches/{church_id}/financial-records/{record_id}/verify", json={}, headers=owner
    )
    assert verified.status_code == 200

    summary = (
        await client.get(f"/churches/{church_id}/financial-records/summary", headers=owner)
    ).json()["data"]
    assert summary["total_income"] == 100000
    assert summary["total_expenses"] == 45000
    assert summary["net"] == 55000
    assert summary["income_by_source"] == {"offering": 100000}
    assert summary["expenses_by_category"] == {"maintenance": 45000}


@pytest.mark.asyncio
async def test_summary_dates_expense_by_payment(client: AsyncClient, church, subscribe, test_data):
    """Later edits to a paid expense do not move it out of a closed period"""
    church_id, owner = church
    await subscribe(owner, "starter")
    expense = await client.post(
        f"/churches/{church_id}/expenses", json=test_data.get_copy("expense"), headers=owner
    )
    base = f"/churches/{church_id}/expenses/{expense.json()['data']['id']}"
    await client.post(f"{base}/approve", json={}, headers=owner)
    paid = await client.post(f"{base}/pay", json={}, headers=owner)
    assert paid.json()["data"]["paid_at"] is not None

    now = datetime.now(timezone.utc)
    period = {
        "start_date": (now - timedelta(days=1)).isoformat(),
        "end_date": now.isoformat(),
    }
    summary_url = f"/churches/{church_id}/financial-records/summary"

    before = await client.get(summary_url, params=period, headers=owner)
    assert before.json()["data"]["total_expenses"] == 45000

    noted = await client.post(f"{base}/notes", json={"content": "Receipt filed"}, headers=owner)
    assert noted.status_code == 201

    after = await client.get(summary_url, params=period, headers=owner)
    assert after.json()["data"]["total_expenses"] == 45000
    assert after.json()["data"]["expenses_by_category"] == {"maintenance": 45000}

    earlier = {"end_date": (now - timedelta(days=1)).isoformat()}
    closed = await client.get(summary_url, params=earlier, headers=owner)
    assert closed.json()["data"]["total_expenses"] == 0


@pytest.mark.asyncio
async def test_notes_keep_their_author(client: AsyncClient, church, register, add_member):
    church_id, owner = church
    member_id, member = await register("member")
    member_record = await add_member(church_id, owner, member_id)
    base = f"/churches/{church_id}/members/{member_record}/notes"

    note = await client.post(base, json={"content": "Joined the choir"}, headers=owner)
    assert note.status_code == 201
    note_id = note.json()["data"]["notes"][-1]["id"]

    forbidden = await client.put(f"{base}/{note_id}", json={"content": "Edited"}, headers=member)
    assert forbidden.status_code == 403
    assert forbidden.json()["error"]["code"] == "NOTE_FORBIDDEN"

    edited = await client.put(f"{base}/{note_id}", json={"content": "Leads the choir"}, headers=owner)
    assert edited.status_code == 200
    assert edited.json()["data"]["notes"][-1]["content"] == "Leads the choir"


@pytest.mark.asyncio
async def test_member_list_filters_and_pages(client: AsyncClient, church):
    church_id, owner = church
    for index, role in enumerate(["member", "volunteer", "leader"]):
        response = await client.post(
            f"/churches/{church_id}/members",
            json={"first_name": f"Person{index}", "last_name": "Test", "role": role},
            headers=owner,
        )
        assert response.status_code == 201

    volunteers = await client.get(
        f"/churches/{church_id}/members", params={"role": "volunteer"}, headers=owner
    )
    assert [m["first_name"] for m in volunteers.json()["data"]["items"]] == ["Person1"]

    page = await client.get(f"/churches/{church_id}/members", params={"limit": 2}, headers=owner)
    assert len(page.json()["data"]["items"]) == 2
    assert page.json()["data"]["pagination"]["pages"] == 2
