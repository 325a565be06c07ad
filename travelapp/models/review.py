from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import Integer, String, ForeignKey, DateTime, Boolean, Float, Text, JSON, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, generate_id
from .booking import StayTerm

if TYPE_CHECKING:
    from .rent import Rent
    from .user import User

class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=generate_id)
    property_id: Mapped[str] = mapped_column(ForeignKey("rents.id", ondelete="CASCADE"), nullable=False, index=True)
    property_type: Mapped[StayTerm] = mapped_column(Enum(StayTerm), default=StayTerm.LONG_TERM, nullable=False)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    host_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    title: Mapped[str | None] = mapped_column(String(200))
    comment: Mapped[str | None] = mapped_column(Text)
    # Sub-ratings, 1..5 each
    cleanliness: Mapped[int | None] = mapped_column(Integer)
    communication: Mapped[int | None] = mapped_column(Integer)
    location: Mapped[int | None] = mapped_column(Integer)
    accuracy: Mapped[int | None] = mapped_column(Integer)
    photos: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    helpful: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    property: Mapped[Rent] = relationship(back_populates="reviews")
    user: Mapped[User] = relationship(back_populates="reviews", foreign_keys=[user_id])
    host: Mapped[User] = relationship(foreign_keys=[host_id])
