from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from servis.models.payment import PaymentMethod, PaymentStatus


class PaymentCreate(BaseModel):
    amount: float = Field(ge=0, allow_inf_nan=False)
    method: PaymentMethod
    status: PaymentStatus
    transaction_ref: str | None = Field(default=None, max_length=255)


class PaymentUpdate(BaseModel):
    """Partial update. Omitted fields stay untouched; only transaction_ref may be null."""

    amount: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    method: PaymentMethod | None = None
    status: PaymentStatus | None = None
    transaction_ref: str | None = Field(default=None, max_length=255)

    @field_validator("amount", "method", "status", mode="before")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class PaymentRead(BaseModel):
    id: str
    order_id: str
    amount: float
    method: PaymentMethod
    status: PaymentStatus
    transaction_ref: str | None = None
    paid_at: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

    @field_validator("paid_at", "created_at", "updated_at")
    @classmethod
    def _as_utc(cls, v: datetime | None) -> datetime | None:
        # SQLite drops tzinfo; stored values are always UTC
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
