from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import String, DateTime, Boolean, Float, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, generate_id

if TYPE_CHECKING:
    from .rent import Rent
    from .booking import Booking
    from .review import Review

class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=generate_id)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    first_name: Mapped[str | None] = mapped_column(String(100))
    last_name: Mapped[str | None] = mapped_column(String(100))
    phone: Mapped[str | None] = mapped_column(String(50))
    profile_picture: Mapped[str | None] = mapped_column(String(500))
    bio: Mapped[str | None] = mapped_column(Text)
    # {street, city, state, country, zipCode}
    address: Mapped[dict | None] = mapped_column(JSON)

    # Host flags
    is_host: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    host_rating: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_superhost: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    payment_methods: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    # Entries are {"id": <item id>}
    watchlist: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    likes: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    listed_properties: Mapped[list["Rent"]] = relationship(back_populates="host", cascade="all, delete-orphan")
    bookings: Mapped[list["Booking"]] = relationship(back_populates="guest", foreign_keys="Booking.guest_id", cascade="all, delete-orphan")
    reviews: Mapped[list["Review"]] = relationship(back_populates="user", foreign_keys="Review.user_id", cascade="all, delete-orphan")
