from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import JSON, BigInteger, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from shutterquote.db.base import Base


class DecimalString(TypeDecorator):
    """Stores a Decimal as its exact string form and reads it back unchanged."""

    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class ProductPrice(Base):
    __tablename__ = "product_prices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_type: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    price_per_sqm: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Quotation(Base):
    __tablename__ = "quotations"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    quotation_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    customer_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    customer_address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    product_type: Mapped[str] = mapped_column(String(50), nullable=False)
    width: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)  # cm
    height: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)  # cm
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    area: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)  # m²

    price_per_sqm: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)
    net_price: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)
    vat_percentage: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)
    vat_amount: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)
    gross_price: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)

    discount_type: Mapped[str] = mapped_column(String(20), nullable=False, default="none")
    discount_value: Mapped[Decimal] = mapped_column(DecimalString, nullable=False, default=Decimal("0"))
    discount_amount: Mapped[Decimal] = mapped_column(DecimalString, nullable=False, default=Decimal("0"))

    # [{"label": str, "amount": "<decimal string>"}, ...] in submission order
    additional_costs: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    additional_costs_total: Mapped[Decimal] = mapped_column(
        DecimalString, nullable=False, default=Decimal("0")
    )

    final_total: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
