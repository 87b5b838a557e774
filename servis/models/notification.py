"""Notification model: user-facing message written as a side effect."""

from __future__ import annotations

from sqlalchemy import String, Text, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from servis.models.base import Base, ULIDMixin


class Notification(Base, ULIDMixin):
    __tablename__ = "notifications"

    user_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.id"), index=True)
    title: Mapped[str] = mapped_column(String(255))
    body: Mapped[str] = mapped_column(Text, default="")
    type: Mapped[str] = mapped_column(String(30))  # PAYMENT | ...
    related_id: Mapped[str | None] = mapped_column(String(64), nullable=True, default=None)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)
