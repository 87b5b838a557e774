"""Payment model: at most one per order."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import String, Float, ForeignKey, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from servis.models.base import Base, ULIDMixin, utc_now


class PaymentMethod(str, Enum):
    CASH = "CASH"
    TRANSFER = "TRANSFER"
    EWALLET = "EWALLET"
    OTHER = "OTHER"


class PaymentStatus(str, Enum):
    UNPAID = "UNPAID"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class Payment(Base, ULIDMixin):
    __tablename__ = "payments"

    # unique backs up the duplicate pre-check in the create handler
    order_id: Mapped[str] = mapped_column(String(26), ForeignKey("orders.id"), unique=True, index=True)
    amount: Mapped[float] = mapped_column(Float)
    method: Mapped[str] = mapped_column(String(20))
    status: Mapped[str] = mapped_column(String(20), default=PaymentStatus.UNPAID.value)
    transaction_ref: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=None)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )
