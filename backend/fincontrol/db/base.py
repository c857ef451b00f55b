from __future__ import annotations

import uuid
from datetime import date

from flask_login import UserMixin
from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .session import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class User(UserMixin, Base):
    """Staff account used for sign-in."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # The unique index is the real guard against duplicate sign-ups
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"


class Customer(Base):
    """Customer billed by invoices."""

    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str] = mapped_column(String(255), nullable=False)

    invoices: Mapped[list["Invoice"]] = relationship(
        "Invoice", back_populates="customer", passive_deletes=True
    )

    def __repr__(self):
        return f"<Customer(id={self.id}, name='{self.name}')>"


class Invoice(Base):
    """Invoice row. ``amount`` is stored in cents."""

    __tablename__ = "invoices"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    customer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("customers.id"), nullable=False, index=True
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    date: Mapped[date] = mapped_column(Date, nullable=False)

    customer: Mapped[Customer] = relationship("Customer", back_populates="invoices")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_invoices_amount_positive"),
        CheckConstraint(
            "status IN ('pending', 'paid')", name="ck_invoices_status_valid"
        ),
    )

    def __repr__(self):
        return f"<Invoice(id={self.id}, amount={self.amount}, status='{self.status}')>"
