"""Account models: User, Technician profile, UserSession."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from servis.models.base import Base, ULIDMixin

ROLE_CUSTOMER = "customer"
ROLE_TECHNICIAN = "technician"
ROLE_ADMIN = "admin"
ROLES = (ROLE_CUSTOMER, ROLE_TECHNICIAN, ROLE_ADMIN)


class User(Base, ULIDMixin):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    display_name: Mapped[str] = mapped_column(String(255), default="")
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), default=ROLE_CUSTOMER)  # customer | technician | admin
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    def is_technician(self) -> bool:
        return self.role == ROLE_TECHNICIAN


class Technician(Base, ULIDMixin):
    """Technician profile; orders are assigned to this id, not to the user id."""

    __tablename__ = "technicians"

    user_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.id"), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(200))
    phone: Mapped[str] = mapped_column(String(50), default="")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class UserSession(Base, ULIDMixin):
    __tablename__ = "user_sessions"

    user_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.id"))
    token_hash: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    ip_address: Mapped[str] = mapped_column(String(45), default="")
