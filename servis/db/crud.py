"""CRUD operations for users, orders, payments and notifications."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from servis.models import User, Technician, Order, Payment, Notification


# ── User / Technician ────────────────────────────────────

async def create_user(
    db: AsyncSession, email: str, password_hash: str,
    role: str = "customer", display_name: str = "",
) -> User:
    user = User(email=email, password_hash=password_hash, role=role, display_name=display_name)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def create_technician(db: AsyncSession, user_id: str, name: str, phone: str = "") -> Technician:
    tech = Technician(user_id=user_id, name=name, phone=phone)
    db.add(tech)
    await db.commit()
    await db.refresh(tech)
    return tech


async def get_technician_for_user(db: AsyncSession, user_id: str) -> Technician | None:
    result = await db.execute(select(Technician).where(Technician.user_id == user_id))
    return result.scalars().first()


# ── Order ────────────────────────────────────────────────

async def create_order(
    db: AsyncSession, customer_id: str,
    technician_id: str | None = None, description: str = "",
) -> Order:
    order = Order(customer_id=customer_id, technician_id=technician_id, description=description)
    db.add(order)
    await db.commit()
    await db.refresh(order)
    return order


async def get_order(db: AsyncSession, order_id: str) -> Order | None:
    return await db.get(Order, order_id)


# ── Payment ──────────────────────────────────────────────

async def get_payment(db: AsyncSession, payment_id: str) -> Payment | None:
    return await db.get(Payment, payment_id)


async def get_payment_for_order(db: AsyncSession, order_id: str) -> Payment | None:
    result = await db.execute(select(Payment).where(Payment.order_id == order_id))
    return result.scalars().first()


async def create_payment(
    db: AsyncSession, order_id: str, amount: float, method: str, status: str,
    transaction_ref: str | None = None, paid_at: datetime | None = None,
) -> Payment:
    payment = Payment(
        order_id=order_id, amount=amount, method=method, status=status,
        transaction_ref=transaction_ref, paid_at=paid_at,
    )
    db.add(payment)
    await db.commit()
    await db.refresh(payment)
    return payment


async def update_payment(db: AsyncSession, payment: Payment, **kwargs) -> Payment:
    # None is a legitimate value here (clearing transaction_ref), so every key is applied
    for k, v in kwargs.items():
        setattr(payment, k, v)
    await db.commit()
    await db.refresh(payment)
    return payment


# ── Notification ─────────────────────────────────────────

async def create_notification(
    db: AsyncSession, user_id: str, title: str, body: str,
    type: str, related_id: str | None = None,
) -> Notification:
    notification = Notification(
        user_id=user_id, title=title, body=body, type=type, related_id=related_id,
    )
    db.add(notification)
    await db.commit()
    await db.refresh(notification)
    return notification


async def list_notifications_for_user(db: AsyncSession, user_id: str) -> list[Notification]:
    result = await db.execute(
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at)
    )
    return list(result.scalars().all())
