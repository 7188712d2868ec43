import os

# Settings are read at import time, so the test environment must be in place first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-for-session-cookies"
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_TO_FILE"] = "false"

import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import goods_transport.models  # noqa: F401  registers every table on Base.metadata
from goods_transport.core.config import settings
from goods_transport.core.database import get_async_session
from goods_transport.main import app
from goods_transport.models.base import Base

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "StrongPass123!"
BASE_URL = "http://testserver"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def make_client(session_maker):
    """Factory for clients sharing the test database; each carries its own session cookie"""
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_db
    clients = []

    async def factory(token: str = None) -> AsyncClient:
        cookies = {settings.SESSION_COOKIE_NAME: token} if token else None
        ac = AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL, cookies=cookies)
        clients.append(ac)
        return ac

    yield factory

    for ac in clients:
        await ac.aclose()
    app.dependency_overrides.clear()


@pytest.fixture
async def client(make_client) -> AsyncClient:
    """Client without a session"""
    return await make_client()


async def signup_and_login(make_client, username: str, role: str) -> AsyncClient:
    anonymous = await make_client()
    response = await anonymous.post(
        "/api/v1/auth/signup",
        json={"username": username, "password": TEST_PASSWORD, "role": role},
    )
    assert response.status_code == 201, response.text

    response = await anonymous.post(
        "/api/v1/auth/login", json={"username": username, "password": TEST_PASSWORD}
    )
    assert response.status_code == 200, response.text
    return await make_client(response.cookies[settings.SESSION_COOKIE_NAME])


@pytest.fixture
async def superadmin_client(make_client) -> AsyncClient:
    # The first account is always promoted to SUPERADMIN
    return await signup_and_login(make_client, "owner", "OPERATOR")


@pytest.fixture
async def admin_client(make_client, superadmin_client) -> AsyncClient:
    return await signup_and_login(make_client, "manager", "ADMIN")


@pytest.fixture
async def operator_client(make_client, superadmin_client) -> AsyncClient:
    return await signup_and_login(make_client, "clerk", "OPERATOR")


@pytest.fixture
async def master_data(superadmin_client) -> dict:
    """Minimal master records needed to register shipments"""
    async def create(path: str, payload: dict) -> int:
        response = await superadmin_client.post(f"/api/v1/{path}", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return {
        "lahore": await create("cities", {"name": "Lahore"}),
        "karachi": await create("cities", {"name": "Karachi"}),
        "agency": await create("agencies", {"name": "Daewoo Cargo"}),
        "vehicle": await create("vehicles", {"vehicleNumber": "lhr-1234"}),
        "sender": await create("parties", {"name": "Ali Traders", "contactInfo": "0300-1234567"}),
        "receiver": await create("parties", {"name": "Bilal Stores", "contactInfo": "0321-7654321"}),
        "item": await create("items", {"description": "Cotton Bales"}),
    }


def shipment_payload(master_data: dict, **overrides) -> dict:
    payload = {
        "bility_number": "B-1001",
        "bility_date": "2024-03-15",
        "departure_city_id": master_data["lahore"],
        "to_city_id": master_data["karachi"],
        "forwarding_agency_id": master_data["agency"],
        "vehicle_number_id": master_data["vehicle"],
        "sender_id": master_data["sender"],
        "receiver_id": master_data["receiver"],
        "total_amount": "1500.00",
        "total_delivery_charges": "200.00",
        "remarks": "Handle with care",
        "goods_details": [
            {"item_id": master_data["item"], "quantity": 10, "charges": "1500.00", "delivery_charges": "200.00"}
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_shipment(superadmin_client, master_data):
    """Register a shipment through the API and return its JSON"""
    async def factory(**overrides) -> dict:
        response = await superadmin_client.post(
            "/api/v1/shipments", json=shipment_payload(master_data, **overrides)
        )
        assert response.status_code == 201, response.text
        return response.json()["shipment"]

    return factory


def delivery_payload(register_number: str, **overrides) -> dict:
    payload = {
        "shipment_id": register_number,
        "delivery_date": "2024-03-20",
        "station_expense": "50",
        "bility_expense": "20",
        "station_labour": "30",
        "cart_labour": "10",
        "receiver_name": "Bilal",
        "receiver_phone": "0321-7654321",
        "receiver_cnic": "35202-1234567-1",
        "receiver_address": "Shop 4, Saddar, Karachi",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def shipment_data(master_data):
    """Builder for shipment request bodies"""
    def build(**overrides) -> dict:
        return shipment_payload(master_data, **overrides)
    return build


@pytest.fixture
def delivery_data():
    """Builder for delivery request bodies"""
    return delivery_payload
