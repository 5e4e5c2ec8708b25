from datetime import timedelta
from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlalchemy import update

from src.domain.base import utcnow
from src.domain.entities import AccountToken

EMAIL = "grace@example.com"


@pytest.mark.asyncio
async def test_registration_mails_verification_link(client: AsyncClient, register, outbox):
    _, owner = await register("owner")
    token = outbox.last("email_verification", EMAIL)
    assert token is not None

    me = await client.get("/auth/me", headers=owner)
    assert me.json()["data"]["is_email_verified"] is False

    verified = await client.post("/auth/verify-email", json={"token": token})
    assert verified.status_code == 200
    assert verified.json()["data"]["status"] == "verified"

    me = await client.get("/auth/me", headers=owner)
    assert me.json()["data"]["is_email_verified"] is True

    again = await client.post("/auth/verify-email", json={"token": token})
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "TOKEN_ALREADY_USED"


@pytest.mark.asyncio
async def test_resend_replaces_verification_link(client: AsyncClient, register, outbox):
    await register("owner")
    first = outbox.last("email_verification", EMAIL)

    resent = await client.post("/auth/resend-verification", json={"email": EMAIL})
    assert resent.json()["data"]["status"] == "sent"
    second = outbox.last("email_verification", EMAIL)
    assert second != first

    stale = await client.post("/auth/verify-email", json={"token": first})
    assert stale.status_code == 400

    assert (await client.post("/auth/verify-email", json={"token": second})).status_code == 200

    done = await client.post("/auth/resend-verification", json={"email": EMAIL})
    assert done.json()["data"]["status"] == "already_verified"


@pytest.mark.asyncio
async def test_unknown_email_gets_the_same_answer(client: AsyncClient, register, outbox):
    await register("owner")

    known = await client.post("/auth/forgot-password", json={"email": EMAIL})
    unknown = await client.post("/auth/forgot-password", json={"email": "nobody@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json()["data"] == unknown.json()["data"]
    assert outbox.last("password_reset", "nobody@example.com") is None
    assert outbox.last("password_reset", EMAIL) is not None


@pytest.mark.asyncio
async def test_password_reset_replaces_password_and_sessions(
    client: AsyncClient, test_data, outbox
):
    registered = await client.post("/auth/register", json=test_data.account("owner"))
    old_refresh = registered.json()["data"]["refresh_token"]
    client.cookies.clear()

    await client.post("/auth/forgot-password", json={"email": EMAIL})
    token = outbox.last("password_reset", EMAIL)

    reset = await client.post(
        "/auth/reset-password", json={"token": token, "new_password": "BrandNew456"}
    )
    assert reset.status_code == 200

    old_login = await client.post("/auth/login", json={"email": EMAIL, "password": "SecurePass123"})
    assert old_login.status_code == 401
    new_login = await client.post("/auth/login", json={"email": EMAIL, "password": "BrandNew456"})
    assert new_login.status_code == 200

    refreshed = await client.post("/auth/refresh-token", json={"refresh_token": old_refresh})
    assert refreshed.status_code == 401

    reused = await client.post(
        "/auth/reset-password", json={"token": token, "new_password": "Another789"}
    )
    assert reused.status_code == 400
    assert reused.json()["error"]["code"] == "TOKEN_ALREADY_USED"


@pytest.mark.asyncio
async def test_expired_reset_token_is_refused(client: AsyncClient, register, outbox, db_session):
    account_id, _ = await register("owner")
    await client.post("/auth/forgot-password", json={"email": EMAIL})
    token = outbox.last("password_reset", EMAIL)

    await db_session.execute(
        update(AccountToken)
        .where(AccountToken.account_id == UUID(account_id))
        .values(expires_at=utcnow() - timedelta(minutes=1))
    )
    await db_session.commit()

    response = await client.post(
        "/auth/reset-password", json={"token": token, "new_password": "BrandNew456"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_garbage_reset_token(client: AsyncClient):
    response = await client.post(
        "/auth/reset-password", json={"token": "not-a-token", "new_password": "BrandNew456"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"
