from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING
from enum import Enum as PyEnum
from sqlalchemy import Integer, String, ForeignKey, DateTime, Float, Text, JSON, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, generate_id

if TYPE_CHECKING:
    from .rent import Rent
    from .user import User

class StayTerm(str, PyEnum):
    LONG_TERM = "long-term"
    SHORT_TERM = "short-term"

class BookingStatus(str, PyEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=generate_id)
    property_id: Mapped[str] = mapped_column(ForeignKey("rents.id", ondelete="CASCADE"), nullable=False, index=True)
    property_type: Mapped[StayTerm] = mapped_column(Enum(StayTerm), default=StayTerm.LONG_TERM, nullable=False)
    guest_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    host_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    check_in_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    check_out_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    number_of_guests: Mapped[int] = mapped_column(Integer, nullable=False)
    number_of_nights: Mapped[int | None] = mapped_column(Integer)
    status: Mapped[BookingStatus] = mapped_column(Enum(BookingStatus), default=BookingStatus.PENDING, nullable=False)
    # {pricePerNight, numberOfNights, subtotal, serviceFee, cleaningFee, tax, total}
    pricing: Mapped[dict] = mapped_column(JSON, nullable=False)
    special_requests: Mapped[str | None] = mapped_column(Text)
    cancellation_reason: Mapped[str | None] = mapped_column(Text)
    cancellation_date: Mapped[datetime | None] = mapped_column(DateTime)
    refund_amount: Mapped[float | None] = mapped_column(Float)
    guest_notes: Mapped[str | None] = mapped_column(Text)
    host_notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    property: Mapped[Rent] = relationship(back_populates="bookings")
    guest: Mapped[User] = relationship(back_populates="bookings", foreign_keys=[guest_id])
    host: Mapped[User] = relationship(foreign_keys=[host_id])
