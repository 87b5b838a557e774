"""Payment API: show, record and update the payment attached to an order."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from servis.db import crud
from servis.db.engine import get_db
from servis.dependencies import require_auth
from servis.schemas import APIResponse, PaymentCreate, PaymentRead, PaymentUpdate
from servis.services import payments as payment_rules
from servis.services.auth import AuthContext

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["payments"])


@router.get("/orders/{order_id}/payment")
async def show_payment(
    order_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    order = await crud.get_order(db, order_id)
    if not order:
        raise HTTPException(404, "Order not found")

    if not payment_rules.can_view_order_payment(auth, order):
        logger.warning("User %s denied payment of order %s", auth.user_id, order_id)
        raise HTTPException(403, "Unauthorized")

    payment = await crud.get_payment_for_order(db, order.id)
    if not payment:
        raise HTTPException(404, "Payment not found")

    return APIResponse(success=True, data=PaymentRead.model_validate(payment))


@router.post("/orders/{order_id}/payment", status_code=201)
async def store_payment(
    order_id: str,
    body: PaymentCreate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    order = await crud.get_order(db, order_id)
    if not order:
        raise HTTPException(404, "Order not found")

    if not payment_rules.can_record_payment(auth, order):
        logger.warning("User %s (%s) denied recording payment of order %s", auth.user_id, auth.role, order_id)
        raise HTTPException(403, "Unauthorized")

    try:
        payment = await payment_rules.record_payment(db, order, body)
    except payment_rules.DuplicatePaymentError:
        raise HTTPException(400, "Payment already exists for this order")

    return APIResponse(
        success=True,
        message="Payment created successfully",
        data=PaymentRead.model_validate(payment),
        status_code=201,
    )


@router.put("/payments/{payment_id}")
async def update_payment(
    payment_id: str,
    body: PaymentUpdate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    payment = await crud.get_payment(db, payment_id)
    if not payment:
        raise HTTPException(404, "Payment not found")

    if not payment_rules.can_manage_payments(auth):
        logger.warning("User %s (%s) denied update of payment %s", auth.user_id, auth.role, payment_id)
        raise HTTPException(403, "Unauthorized")

    payment = await payment_rules.apply_payment_update(db, payment, body)

    return APIResponse(
        success=True,
        message="Payment updated successfully",
        data=PaymentRead.model_validate(payment),
    )
