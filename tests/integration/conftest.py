from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.app.services.account_mailer import AccountMailer
from src.depends import get_account_mailer, get_unit_of_work
from src.domain.entities import Account, AccountRole
from tests.fixtures.json_loader import ChurchFixtureData


@pytest.fixture
def test_data():
    return ChurchFixtureData()


class RecordingMailer(AccountMailer):
    """Keeps sent tokens as (kind, email, token) instead of mailing them"""

    def __init__(self):
        self.sent = []

    async def send_password_reset(self, account, token):
        self.sent.append(("password_reset", account.email, token))

    async def send_email_verification(self, account, token):
        self.sent.append(("email_verification", account.email, token))

    def last(self, kind, email):
        tokens = [t for k, e, t in self.sent if k == kind and e == email]
        return tokens[-1] if tokens else None


@pytest.fixture
def outbox():
    return RecordingMailer()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session, outbox):
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_account_mailer] = lambda: outbox

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register(client: AsyncClient, test_data):
    """
    Register one of the accounts from test_data and return
    (account_id, auth headers).

    The session cookie set by the API is dropped so every request states
    its credentials explicitly.
    """

    async def _register(name: str):
        response = await client.post("/auth/register", json=test_data.account(name))
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        client.cookies.clear()
        return data["account"]["id"], {"Authorization": f"Bearer {data['access_token']}"}

    return _register


@pytest.fixture
def create_church(client: AsyncClient, test_data):
    async def _create_church(headers, **overrides):
        payload = test_data.payload("church", **overrides)
        response = await client.post("/churches", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]["id"]

    return _create_church


@pytest.fixture
def add_member(client: AsyncClient):
    """Link an account to a church as an active member, acting as a church admin"""

    async def _add_member(church_id, admin_headers, account_id, role="member"):
        response = await client.post(
            f"/churches/{church_id}/members",
            json={"account_id": account_id, "first_name": "Linked", "last_name": "Member", "role": role},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]["id"]

    return _add_member


@pytest.fixture
def subscribe(client: AsyncClient):
    async def _subscribe(headers, plan_name="starter"):
        response = await client.post(
            "/subscriptions/subscribe",
            json={"plan_name": plan_name, "payment_method": "card"},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _subscribe


@pytest.fixture
def promote_to_admin(db_session: AsyncSession):
    """Global admins cannot self-register; grant the role directly"""

    async def _promote(account_id):
        await db_session.execute(
            update(Account).where(Account.id == UUID(str(account_id))).values(role=AccountRole.admin)
        )
        await db_session.commit()

    return _promote
