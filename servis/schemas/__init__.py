"""Pydantic request/response schemas."""

from servis.schemas.auth import LoginRequest, UserRead
from servis.schemas.envelope import APIResponse
from servis.schemas.payment import PaymentCreate, PaymentUpdate, PaymentRead

__all__ = [
    "LoginRequest", "UserRead",
    "APIResponse",
    "PaymentCreate", "PaymentUpdate", "PaymentRead",
]
