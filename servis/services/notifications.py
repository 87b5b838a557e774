"""Notification side effects for payment events."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from servis.db import crud
from servis.models import Notification, Order

logger = logging.getLogger(__name__)

NOTIFICATION_TYPE_PAYMENT = "PAYMENT"

PAYMENT_RECORDED_TITLE = "Pembayaran"
PAYMENT_RECORDED_BODY = "Pembayaran untuk order Anda telah dicatat"
PAYMENT_CONFIRMED_TITLE = "Pembayaran Dikonfirmasi"
PAYMENT_CONFIRMED_BODY = "Pembayaran Anda telah dikonfirmasi"


async def _notify_customer(db: AsyncSession, order: Order, title: str, body: str) -> Notification:
    notification = await crud.create_notification(
        db,
        user_id=order.customer_id,
        title=title,
        body=body,
        type=NOTIFICATION_TYPE_PAYMENT,
        related_id=str(order.id),
    )
    logger.info("Notified customer %s about order %s: %s", order.customer_id, order.id, title)
    return notification


async def notify_payment_recorded(db: AsyncSession, order: Order) -> Notification:
    return await _notify_customer(db, order, PAYMENT_RECORDED_TITLE, PAYMENT_RECORDED_BODY)


async def notify_payment_confirmed(db: AsyncSession, order: Order) -> Notification:
    return await _notify_customer(db, order, PAYMENT_CONFIRMED_TITLE, PAYMENT_CONFIRMED_BODY)
