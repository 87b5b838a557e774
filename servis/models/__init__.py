"""SQLAlchemy ORM models."""

from servis.models.base import Base
from servis.models.user import User, Technician, UserSession
from servis.models.order import Order
from servis.models.payment import Payment, PaymentMethod, PaymentStatus
from servis.models.notification import Notification

__all__ = [
    "Base",
    "User", "Technician", "UserSession",
    "Order",
    "Payment", "PaymentMethod", "PaymentStatus",
    "Notification",
]
