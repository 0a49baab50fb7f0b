"""Service test fixtures: async DB, FastAPI test client and entity factories.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Factories create entities through the HTTP API and return the JSON body

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Service-level tests use test_db directly and a fixed clock; route tests
      never share test_db with the client
"""

from datetime import datetime, timezone
from itertools import count

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event

from cardealer.db.base import Base
from cardealer.db.session import create_session_factory
from cardealer.infrastructure.database import get_db, DatabaseSessionManager
import cardealer.infrastructure.database as db_module
from cardealer.main import app

FIXED_NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def test_session_factory():
    factory = create_session_factory("sqlite+aiosqlite:///:memory:")
    engine = factory.kw["bind"]
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield factory
    await engine.dispose()


@pytest.fixture
def test_engine(test_session_factory):
    return test_session_factory.kw["bind"]


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Payload builders ───────────────────────────────────────────

_seq = count(1)


def vin(n: int) -> str:
    return f"1HGCM82633A{n:06d}"


def dealer_body(n: int | None = None) -> dict:
    n = n if n is not None else next(_seq)
    return {
        "name": f"Dealer {n}",
        "address": f"{n} Main Street",
        "phoneNumber": f"+1 305 555 {n:04d}",
    }


def car_body(dealer_id: int, n: int | None = None, **overrides) -> dict:
    n = n if n is not None else next(_seq)
    body = {
        "vin": vin(n),
        "model": "Accord",
        "brand": "Honda",
        "year": 2020,
        "price": 20000.0,
        "color": "Blue",
        "mileage": 1000.0,
        "dealerId": dealer_id,
    }
    body.update(overrides)
    return body


# ─── HTTP factories ─────────────────────────────────────────────

@pytest.fixture
def make_dealer(client):
    async def _make(**overrides) -> dict:
        res = await client.post("/api/dealers", json={**dealer_body(), **overrides})
        assert res.status_code == 201, res.text
        return res.json()
    return _make


@pytest.fixture
def make_car(client, make_dealer):
    async def _make(dealer_id: int | None = None, **overrides) -> dict:
        if dealer_id is None:
            dealer_id = (await make_dealer())["id"]
        res = await client.post("/api/cars", json=car_body(dealer_id, **overrides))
        assert res.status_code == 201, res.text
        return res.json()
    return _make


@pytest.fixture
def make_user(client):
    async def _make(username: str | None = None) -> dict:
        res = await client.post(
            "/api/users", json={"username": username or f"user{next(_seq)}"},
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _make


@pytest.fixture
def make_order(client):
    async def _make(user_id: int, car_ids: list[int]) -> dict:
        res = await client.post(
            "/api/orders", json={"userId": user_id, "carIds": car_ids},
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _make


@pytest.fixture
def car_payload():
    """Builder for raw car request bodies: car_payload(dealer_id, **overrides)."""
    return car_body


@pytest.fixture
def dealer_payload():
    return dealer_body
