from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING
from enum import Enum as PyEnum
from sqlalchemy import Column, Table, Integer, String, ForeignKey, DateTime, Float, Text, JSON, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, generate_id

if TYPE_CHECKING:
    from .user import User
    from .amenity import Amenity
    from .booking import Booking
    from .review import Review

class PropertyType(str, PyEnum):
    APARTMENT = "apartment"
    HOUSE = "house"
    VILLA = "villa"
    CONDO = "condo"
    ROOM = "room"
    OTHER = "other"

class CancellationPolicy(str, PyEnum):
    FLEXIBLE = "flexible"
    MODERATE = "moderate"
    STRICT = "strict"

rent_amenities = Table(
    "rent_amenities",
    Base.metadata,
    Column("rent_id", ForeignKey("rents.id", ondelete="CASCADE"), primary_key=True),
    Column("amenity_id", ForeignKey("amenities.id", ondelete="CASCADE"), primary_key=True),
)

class Rent(Base):
    __tablename__ = "rents"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=generate_id)
    host_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    # {country, city, address, latitude, longitude}
    location: Mapped[dict | None] = mapped_column(JSON)
    photos: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    cover: Mapped[str | None] = mapped_column(String(500))
    description: Mapped[str | None] = mapped_column(Text)
    bedroom_count: Mapped[int] = mapped_column(Integer, nullable=False)
    bathroom_count: Mapped[int] = mapped_column(Integer, nullable=False)
    max_guests: Mapped[int] = mapped_column(Integer, nullable=False)
    square_footage: Mapped[float | None] = mapped_column(Float)
    property_type: Mapped[PropertyType] = mapped_column(Enum(PropertyType), default=PropertyType.OTHER, nullable=False)
    check_in_time: Mapped[str | None] = mapped_column(String(20))
    check_out_time: Mapped[str | None] = mapped_column(String(20))
    cancellation_policy: Mapped[CancellationPolicy] = mapped_column(Enum(CancellationPolicy), default=CancellationPolicy.MODERATE, nullable=False)
    house_rules: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    price_per_night: Mapped[float | None] = mapped_column(Float)
    discount: Mapped[float | None] = mapped_column(Float)
    rating: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    likes: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    # [{startDate, endDate, isAvailable}]
    availability: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    host: Mapped[User] = relationship(back_populates="listed_properties")
    amenities: Mapped[list[Amenity]] = relationship(secondary=rent_amenities, back_populates="rents")
    reviews: Mapped[list[Review]] = relationship(back_populates="property", cascade="all, delete-orphan")
    bookings: Mapped[list[Booking]] = relationship(back_populates="property", cascade="all, delete-orphan")
