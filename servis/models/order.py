"""Order model: a unit of work linking a customer and a technician."""

from __future__ import annotations

from sqlalchemy import String, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from servis.models.base import Base, ULIDMixin


class Order(Base, ULIDMixin):
    __tablename__ = "orders"

    customer_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.id"), index=True)
    technician_id: Mapped[str | None] = mapped_column(
        String(26), ForeignKey("technicians.id"), nullable=True, default=None, index=True
    )
    description: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(20), default="PENDING")
