import pytest
from httpx import AsyncClient


def _fields(response):
    return {detail["field"] for detail in response.json()["error"]["details"]}


@pytest.mark.asyncio
async def test_invalid_phone_is_reported_by_field(client: AsyncClient, test_data):
    payload = test_data.account("member")
    payload["phone"] = "123"

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_FAILED"
    assert _fields(response) == {"phone"}


@pytest.mark.asyncio
async def test_phone_is_normalized_to_digits(client: AsyncClient, test_data):
    payload = test_data.account("member")
    payload["phone"] = "0801 234 5678"

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 201
    assert response.json()["data"]["account"]["phone"] == "08012345678"


@pytest.mark.asyncio
async def test_every_invalid_field_is_reported_together(client: AsyncClient):
    response = await client.post(
        "/auth/register",
        json={"first_name": "A", "last_name": "Okafor", "email": "not-an-email", "password": "short"},
    )

    assert response.status_code == 400
    assert {"first_name", "email", "password"} <= _fields(response)


@pytest.mark.asyncio
async def test_email_is_case_insensitive(client: AsyncClient, test_data):
    payload = test_data.account("member")
    await client.post("/auth/register", json=payload)

    payload["email"] = payload["email"].upper()
    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_admin_role_cannot_be_self_assigned(client: AsyncClient, test_data):
    payload = {**test_data.account("member"), "role": "admin"}

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "ROLE_NOT_ALLOWED"


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["limit=500", "limit=0", "page=0", "page=abc"])
async def test_pagination_bounds(client: AsyncClient, query):
    response = await client.get(f"/churches?{query}")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_default_page(client: AsyncClient, register, create_church):
    _, owner = await register("owner")
    await create_church(owner)

    response = await client.get("/churches")

    assert response.status_code == 200
    page = response.json()["data"]
    assert page["pagination"] == {"page": 1, "limit": 10, "total": 1, "pages": 1}
    assert page["items"][0]["name"] == "Grace Chapel"


@pytest.mark.asyncio
async def test_reversed_date_range(client: AsyncClient, register, create_church, subscribe):
    _, owner = await register("owner")
    await subscribe(owner, "starter")
    church_id = await create_church(owner)

    response = await client.get(
        f"/churches/{church_id}/financial-records/summary",
        params={"start_date": "2024-06-30T00:00:00", "end_date": "2024-06-01T00:00:00"},
        headers=owner,
    )

    assert response.status_code == 400
    assert _fields(response) == {"end_date"}


@pytest.mark.asyncio
async def test_attachment_type_and_size(client: AsyncClient, register, create_church, test_data):
    _, owner = await register("owner")
    church_id = await create_church(owner)
    expense = await client.post(
        f"/churches/{church_id}/expenses", json=test_data.get_copy("expense"), headers=owner
    )
    url = f"/churches/{church_id}/expenses/{expense.json()['data']['id']}/attachments"

    rejected = await client.post(
        url,
        json={
            "filename": "tool.exe",
            "content_type": "application/x-msdownload",
            "size": 6 * 1024 * 1024,
            "url": "https://files.example.com/tool.exe",
        },
        headers=owner,
    )
    assert rejected.status_code == 400
    assert _fields(rejected) == {"content_type", "size"}

    accepted = await client.post(
        url,
        json={
            "filename": "receipt.pdf",
            "content_type": "application/pdf",
            "size": 20480,
            "url": "https://files.example.com/receipt.pdf",
        },
        headers=owner,
    )
    assert accepted.status_code == 201
    assert accepted.json()["data"]["attachments"][0]["filename"] == "receipt.pdf"
