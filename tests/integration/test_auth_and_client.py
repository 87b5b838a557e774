"""Login flow and the async PaymentClient against the ASGI app."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from servis.client import PaymentAPIError, PaymentClient
from servis.db import crud
from servis.db.engine import get_db
from servis.main import app
from servis.models import Base
from servis.services.auth import SESSION_COOKIE_NAME, hash_password

_PASSWORD = "rahasia123"


@pytest_asyncio.fixture
async def order_id():
    test_engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with factory() as db:
        customer = await crud.create_user(
            db, email="customer@example.com", password_hash=hash_password(_PASSWORD), role="customer",
        )
        tech_user = await crud.create_user(
            db, email="tech@example.com", password_hash=hash_password(_PASSWORD),
            role="technician", display_name="Andi",
        )
        tech = await crud.create_technician(db, tech_user.id, name="Andi")
        order = await crud.create_order(db, customer.id, technician_id=tech.id)

    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield order.id
    app.dependency_overrides.clear()
    await test_engine.dispose()


def _client() -> PaymentClient:
    return PaymentClient("http://test", transport=ASGITransport(app=app))


@pytest.mark.asyncio
async def test_login_sets_cookie_and_me_works(order_id):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        r = await ac.post("/api/auth/login", json={"email": "tech@example.com", "password": _PASSWORD})
        assert r.status_code == 200
        data = r.json()["data"]
        assert data["user"]["role"] == "technician"
        assert data["user"]["technician_id"] is not None
        assert r.headers["set-cookie"].startswith(f"{SESSION_COOKIE_NAME}={data['token']}")

        ac.cookies.clear()
        ac.cookies.set(SESSION_COOKIE_NAME, data["token"])
        r = await ac.get("/api/auth/me")
        assert r.status_code == 200
        assert r.json()["data"]["email"] == "tech@example.com"

        r = await ac.post("/api/auth/logout")
        assert r.status_code == 200
        ac.cookies.clear()

        r = await ac.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
        assert r.status_code == 401


@pytest.mark.asyncio
async def test_login_wrong_password(order_id):
    async with _client() as api:
        with pytest.raises(PaymentAPIError) as exc:
            await api.login("tech@example.com", "wrong-password")
    assert exc.value.status_code == 401
    assert exc.value.message == "Invalid email or password"


@pytest.mark.asyncio
async def test_client_create_show_update(order_id):
    async with _client() as api:
        await api.login("tech@example.com", _PASSWORD)

        created = await api.create_payment(order_id, {"amount": 200000, "method": "TRANSFER", "status": "UNPAID"})
        payment_id = created["data"]["id"]
        assert created["success"] is True

        shown = await api.get_payment(order_id)
        assert shown["data"]["id"] == payment_id

        updated = await api.update_payment(payment_id, {"status": "PAID", "transaction_ref": "BCA-123"})
        assert updated["data"]["status"] == "PAID"
        assert updated["data"]["paid_at"] is not None
        assert updated["data"]["transaction_ref"] == "BCA-123"


@pytest.mark.asyncio
async def test_client_raises_on_forbidden(order_id):
    async with _client() as api:
        await api.login("customer@example.com", _PASSWORD)
        with pytest.raises(PaymentAPIError) as exc:
            await api.create_payment(order_id, {"amount": 1, "method": "CASH", "status": "PAID"})
    assert exc.value.status_code == 403
    assert exc.value.payload == {"success": False, "message": "Unauthorized"}
