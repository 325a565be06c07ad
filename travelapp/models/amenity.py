from datetime import datetime
from typing import TYPE_CHECKING
from enum import Enum as PyEnum
from sqlalchemy import String, DateTime, Boolean, Text, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base, generate_id

if TYPE_CHECKING:
    from .rent import Rent

class AmenityCategory(str, PyEnum):
    WIFI = "wifi"
    PARKING = "parking"
    KITCHEN = "kitchen"
    ENTERTAINMENT = "entertainment"
    COMFORT = "comfort"
    SAFETY = "safety"
    CLEANING = "cleaning"
    OUTDOOR = "outdoor"
    OTHER = "other"

class Amenity(Base):
    __tablename__ = "amenities"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    category: Mapped[AmenityCategory] = mapped_column(Enum(AmenityCategory), nullable=False, index=True)
    icon: Mapped[str | None] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text)
    is_popular: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    rents: Mapped[list["Rent"]] = relationship(secondary="rent_amenities", back_populates="amenities")
