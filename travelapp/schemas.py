"""
Shared pydantic schemas. JSON keys are camelCase on the wire; attributes stay
snake_case so models can be built straight from ORM objects.
"""
from datetime import datetime
from typing import Annotated, Optional, List
from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel


# Surrounding whitespace is dropped before the length check
Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageOut(BaseModel):
    message: str


# ==== Populated references ====

class UserSummary(CamelModel):
    id: str
    username: str
    email: Optional[str] = None
    phone: Optional[str] = None
    profile_picture: Optional[str] = None


class RentSummary(CamelModel):
    id: str
    title: str
    cover: Optional[str] = None


# ==== Embedded documents ====

class Address(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip_code: Optional[str] = None


class Location(CamelModel):
    country: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class PaymentMethod(CamelModel):
    card_number: Optional[str] = None
    card_holder: Optional[str] = None
    expiry_date: Optional[str] = None
    is_default: Optional[bool] = None


class AvailabilityWindow(CamelModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_available: Optional[bool] = None


class UserOut(CamelModel):
    id: str
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    profile_picture: Optional[str] = None
    bio: Optional[str] = None
    address: Optional[Address] = None
    is_host: bool = False
    host_rating: float = 0
    is_verified: bool = False
    is_superhost: bool = False
    payment_methods: List[PaymentMethod] = []
    watchlist: List[dict] = []
    likes: List[str] = []
    created_at: Optional[datetime] = None


def dump_document(model: Optional[BaseModel], **kwargs):
    """Serialises an embedded document for a JSON column (camelCase keys, ISO dates)."""
    if model is None:
        return None
    return model.model_dump(mode="json", by_alias=True, **kwargs)
