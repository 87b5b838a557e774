from datetime import datetime, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from servis.db import crud
from servis.models import Base, Order, Payment
from servis.schemas import PaymentCreate, PaymentUpdate
from servis.services import payments
from servis.services.auth import AuthContext


def _auth(role, user_id="u1", technician_id=None):
    return AuthContext(user_id=user_id, role=role, email=f"{user_id}@example.com",
                       display_name=user_id, technician_id=technician_id)


ORDER = Order(id="o1", customer_id="cust-1", technician_id="tech-1")


def test_customer_sees_only_own_order():
    assert payments.can_view_order_payment(_auth("customer", "cust-1"), ORDER)
    assert not payments.can_view_order_payment(_auth("customer", "cust-2"), ORDER)


def test_technician_sees_only_assigned_order():
    assert payments.can_view_order_payment(_auth("technician", "t", "tech-1"), ORDER)
    assert not payments.can_view_order_payment(_auth("technician", "t", "tech-2"), ORDER)
    assert not payments.can_view_order_payment(_auth("technician", "t", None), ORDER)


def test_admin_sees_everything():
    assert payments.can_view_order_payment(_auth("admin"), ORDER)


def test_record_requires_assigned_technician_or_admin():
    assert payments.can_record_payment(_auth("admin"), ORDER)
    assert payments.can_record_payment(_auth("technician", "t", "tech-1"), ORDER)
    assert not payments.can_record_payment(_auth("technician", "t", "tech-2"), ORDER)
    assert not payments.can_record_payment(_auth("customer", "cust-1"), ORDER)


def test_manage_payments_role_gate():
    assert payments.can_manage_payments(_auth("technician"))
    assert payments.can_manage_payments(_auth("admin"))
    assert not payments.can_manage_payments(_auth("customer"))


def test_stamp_paid_at_first_paid_only():
    now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert payments.stamp_paid_at(None, {"status": "PAID"}, now) == {"status": "PAID", "paid_at": now}
    assert payments.stamp_paid_at(None, {"status": "UNPAID"}, now) == {"status": "UNPAID"}
    assert payments.stamp_paid_at(None, {"amount": 5}, now) == {"amount": 5}

    already_paid = Payment(paid_at=datetime(2025, 12, 31, tzinfo=timezone.utc))
    assert payments.stamp_paid_at(already_paid, {"status": "PAID"}, now) == {"status": "PAID"}

    unpaid = Payment(paid_at=None)
    assert payments.stamp_paid_at(unpaid, {"status": "PAID"}, now)["paid_at"] == now


@pytest_asyncio.fixture
async def db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def order(db):
    customer = await crud.create_user(db, email="cust@example.com", password_hash="x", role="customer")
    return await crud.create_order(db, customer.id)


async def test_record_payment_notifies_customer(db, order):
    payment = await payments.record_payment(
        db, order, PaymentCreate(amount=100000, method="CASH", status="PAID"),
    )
    assert payment.paid_at is not None

    notes = await crud.list_notifications_for_user(db, order.customer_id)
    assert len(notes) == 1
    assert notes[0].title == "Pembayaran"
    assert notes[0].type == "PAYMENT"
    assert notes[0].related_id == order.id


async def test_record_payment_twice_raises(db, order):
    body = PaymentCreate(amount=1, method="CASH", status="UNPAID")
    await payments.record_payment(db, order, body)
    with pytest.raises(payments.DuplicatePaymentError):
        await payments.record_payment(db, order, body)


async def test_update_confirms_only_on_transition_to_paid(db, order):
    payment = await payments.record_payment(
        db, order, PaymentCreate(amount=1, method="TRANSFER", status="UNPAID"),
    )
    assert payment.paid_at is None

    payment = await payments.apply_payment_update(db, payment, PaymentUpdate(status="PAID"))
    first_paid_at = payment.paid_at
    assert first_paid_at is not None

    payment = await payments.apply_payment_update(db, payment, PaymentUpdate(status="PAID", amount=2))
    assert payment.paid_at == first_paid_at
    assert payment.amount == 2

    titles = [n.title for n in await crud.list_notifications_for_user(db, order.customer_id)]
    assert titles == ["Pembayaran", "Pembayaran Dikonfirmasi"]


async def test_refund_keeps_paid_at(db, order):
    payment = await payments.record_payment(
        db, order, PaymentCreate(amount=1, method="CASH", status="PAID"),
    )
    paid_at = payment.paid_at
    payment = await payments.apply_payment_update(db, payment, PaymentUpdate(status="REFUNDED"))
    assert payment.status == "REFUNDED"
    assert payment.paid_at == paid_at


async def test_unique_constraint_turns_race_into_duplicate(db, order, monkeypatch):
    body = PaymentCreate(amount=1, method="CASH", status="UNPAID")
    await payments.record_payment(db, order, body)

    async def no_payment_yet(db, order_id):
        return None

    monkeypatch.setattr(crud, "get_payment_for_order", no_payment_yet)
    with pytest.raises(payments.DuplicatePaymentError):
        await payments.record_payment(db, order, body)
