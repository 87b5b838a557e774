"""Payment rules: who may see or touch a payment, and when paid_at is stamped.

Authorization mirrors the order's parties:

- customers see payments of their own orders only
- technicians see and record payments of orders assigned to them
- admins may do anything
- only technicians and admins may record or update a payment
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from servis.db import crud
from servis.models import Order, Payment, PaymentStatus
from servis.schemas.payment import PaymentCreate, PaymentUpdate
from servis.services.auth import AuthContext
from servis.services.notifications import notify_payment_recorded, notify_payment_confirmed

logger = logging.getLogger(__name__)


class DuplicatePaymentError(Exception):
    """Raised when an order already carries a payment."""


def _is_assigned_technician(auth: AuthContext, order: Order) -> bool:
    return auth.technician_id is not None and order.technician_id == auth.technician_id


def can_view_order_payment(auth: AuthContext, order: Order) -> bool:
    if auth.is_customer() and order.customer_id != auth.user_id:
        return False
    if auth.is_technician() and not _is_assigned_technician(auth, order):
        return False
    return True


def can_manage_payments(auth: AuthContext) -> bool:
    return auth.is_technician() or auth.is_admin()


def can_record_payment(auth: AuthContext, order: Order) -> bool:
    if not can_manage_payments(auth):
        return False
    if auth.is_technician() and not _is_assigned_technician(auth, order):
        return False
    return True


def stamp_paid_at(payment: Payment | None, changes: dict, now: datetime | None = None) -> dict:
    """Add paid_at to changes when status becomes PAID and no paid_at exists yet."""
    if changes.get("status") != PaymentStatus.PAID.value:
        return changes
    if payment is not None and payment.paid_at is not None:
        return changes
    return {**changes, "paid_at": now or datetime.now(timezone.utc)}


async def record_payment(db: AsyncSession, order: Order, data: PaymentCreate) -> Payment:
    if await crud.get_payment_for_order(db, order.id):
        raise DuplicatePaymentError(order.id)

    order_id = order.id
    fields = stamp_paid_at(None, data.model_dump(mode="json"))
    try:
        payment = await crud.create_payment(db, order_id=order_id, **fields)
    except IntegrityError:
        # lost the race on the unique payments.order_id
        await db.rollback()
        raise DuplicatePaymentError(order_id)
    logger.info("Recorded payment %s for order %s (%s)", payment.id, order.id, payment.status)

    await notify_payment_recorded(db, order)
    return payment


async def apply_payment_update(db: AsyncSession, payment: Payment, data: PaymentUpdate) -> Payment:
    changes = data.model_dump(mode="json", exclude_unset=True)
    previous_status = payment.status
    changes = stamp_paid_at(payment, changes)

    payment = await crud.update_payment(db, payment, **changes)
    logger.info("Updated payment %s fields=%s", payment.id, sorted(changes))

    if changes.get("status") == PaymentStatus.PAID.value and previous_status != PaymentStatus.PAID.value:
        order = await crud.get_order(db, payment.order_id)
        if order is not None:
            await notify_payment_confirmed(db, order)
    return payment
