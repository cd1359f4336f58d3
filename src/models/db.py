"""SQLAlchemy ORM models for deal persistence."""

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class DealRecord(Base):
    __tablename__ = "vehicle_deals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    seq: Mapped[int] = mapped_column(Integer, index=True)  # Insertion order
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    # Vehicle
    make: Mapped[str] = mapped_column(String(100), default="")
    model: Mapped[str] = mapped_column(String(100), default="")
    trim: Mapped[str] = mapped_column(String(100), default="")
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    vin: Mapped[str] = mapped_column(String(17), default="")
    mileage: Mapped[int | None] = mapped_column(Integer, nullable=True)
    dealership: Mapped[str] = mapped_column(String(255), default="")
    notes: Mapped[str] = mapped_column(Text, default="")
    credit_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    seats: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Warranty / contact
    warranty_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    warranty_remaining_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    warranty_remaining_miles: Mapped[int | None] = mapped_column(Integer, nullable=True)
    warranty_transferrable: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    rep_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    rep_phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    carfax_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    vdp_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Pricing & financing
    listed_price: Mapped[float] = mapped_column(Float, default=0.0)
    negotiated_price: Mapped[float] = mapped_column(Float, default=0.0)
    apr: Mapped[float] = mapped_column(Float, default=0.0)
    buy_rate_apr: Mapped[float | None] = mapped_column(Float, nullable=True)
    term_length: Mapped[int] = mapped_column(Integer, default=60)
    down_payment: Mapped[float] = mapped_column(Float, default=0.0)

    # Tax & fees
    tax_rate: Mapped[float] = mapped_column(Float, default=0.0)
    tax: Mapped[float] = mapped_column(Float, default=0.0)
    dealer_fees: Mapped[float] = mapped_column(Float, default=0.0)
    registration_fees: Mapped[float] = mapped_column(Float, default=0.0)
    government_fees: Mapped[float] = mapped_column(Float, default=0.0)
    title_fees: Mapped[float] = mapped_column(Float, default=0.0)
    other_fees: Mapped[float] = mapped_column(Float, default=0.0)


class MakeAprRateRecord(Base):
    __tablename__ = "make_apr_rates"
    __table_args__ = (UniqueConstraint("make_key", "term_length"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    make: Mapped[str] = mapped_column(String(100))  # As entered, trimmed
    make_key: Mapped[str] = mapped_column(String(100), index=True)  # Lower-cased lookup key
    term_length: Mapped[int] = mapped_column(Integer)
    apr: Mapped[float] = mapped_column(Float)
