import logging
from datetime import datetime
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import Field
from sqlalchemy.orm import Session, selectinload

from ..db import get_db
from ..models import Rent, User, Amenity, PropertyType, CancellationPolicy, BookingStatus
from ..schemas import (
    CamelModel, MessageOut, UserOut, Location, AvailabilityWindow, dump_document,
)
from ..security import require_host
from .amenities import AmenityOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/long-term-stays", tags=["long-term-stays"])

RECENT_LIMIT = 5

# ==== Schemas ====

class RentReviewOut(CamelModel):
    id: str
    user_id: str
    rating: int
    title: Optional[str] = None
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

class RentBookingOut(CamelModel):
    id: str
    guest_id: str
    check_in_date: datetime
    check_out_date: datetime
    status: BookingStatus

class RentOut(CamelModel):
    id: str
    host_id: str
    host: Optional[UserOut] = None
    title: str
    date: Optional[datetime] = None
    location: Optional[Location] = None
    photos: List[str] = []
    cover: Optional[str] = None
    description: Optional[str] = None
    bedroom_count: int
    bathroom_count: int
    max_guests: int
    square_footage: Optional[float] = None
    property_type: PropertyType
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    cancellation_policy: CancellationPolicy
    house_rules: List[str] = []
    amenities: List[AmenityOut] = []
    price: float
    price_per_night: Optional[float] = None
    discount: Optional[float] = None
    rating: float = 0
    likes: List[str] = []
    availability: List[AvailabilityWindow] = []
    reviews: List[RentReviewOut] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class RentDetailOut(RentOut):
    bookings: List[RentBookingOut] = []

class RentCreateIn(CamelModel):
    host_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    location: Location
    bedroom_count: int = Field(gt=0)
    bathroom_count: int = Field(gt=0)
    max_guests: int = Field(gt=0)
    price: float = Field(gt=0)
    date: Optional[datetime] = None
    photos: List[str] = []
    cover: Optional[str] = None
    description: Optional[str] = None
    square_footage: Optional[float] = None
    property_type: PropertyType = PropertyType.OTHER
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    cancellation_policy: CancellationPolicy = CancellationPolicy.MODERATE
    house_rules: List[str] = []
    amenities: List[str] = []
    price_per_night: Optional[float] = Field(default=None, ge=0)
    discount: Optional[float] = None
    availability: List[AvailabilityWindow] = []

class RentUpdateIn(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    location: Optional[Location] = None
    bedroom_count: Optional[int] = Field(default=None, gt=0)
    bathroom_count: Optional[int] = Field(default=None, gt=0)
    max_guests: Optional[int] = Field(default=None, gt=0)
    price: Optional[float] = Field(default=None, gt=0)
    date: Optional[datetime] = None
    photos: Optional[List[str]] = None
    cover: Optional[str] = None
    description: Optional[str] = None
    square_footage: Optional[float] = None
    property_type: Optional[PropertyType] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    cancellation_policy: Optional[CancellationPolicy] = None
    house_rules: Optional[List[str]] = None
    amenities: Optional[List[str]] = None
    price_per_night: Optional[float] = Field(default=None, ge=0)
    discount: Optional[float] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    availability: Optional[List[AvailabilityWindow]] = None

class LikeIn(CamelModel):
    user_id: str = Field(min_length=1)

# Columns that cannot be cleared by sending null
_REQUIRED_FIELDS = {
    "title", "bedroom_count", "bathroom_count", "max_guests", "price",
    "property_type", "cancellation_policy", "photos", "house_rules", "rating",
}

# ==== Helpers ====

def get_rent_or_404(db: Session, rent_id: str, *options) -> Rent:
    rent = db.query(Rent).options(*options).filter(Rent.id == rent_id).first()
    if not rent:
        raise HTTPException(status_code=404, detail="Long-term stay not found")
    return rent

def resolve_amenities(db: Session, amenity_ids: List[str]) -> List[Amenity]:
    wanted = list(dict.fromkeys(amenity_ids))
    if not wanted:
        return []
    found = db.query(Amenity).filter(Amenity.id.in_(wanted)).all()
    if len(found) != len(wanted):
        raise HTTPException(status_code=400, detail="Unknown amenity id")
    by_id = {a.id: a for a in found}
    return [by_id[i] for i in wanted]

def ensure_host(rent_host_id: str, token: dict) -> None:
    if rent_host_id != token.get("userId"):
        raise HTTPException(status_code=403, detail="Only the host can manage this listing.")

# ==== Endpoints ====

@router.get("", response_model=List[RentOut])
def list_rents(
    db: Session = Depends(get_db),
    host_id: Optional[str] = Query(None, alias="hostId"),
    property_type: Optional[PropertyType] = Query(None, alias="propertyType"),
    city: Optional[str] = None,
    country: Optional[str] = None,
    max_guests: Optional[int] = Query(None, alias="maxGuests"),
):
    q = db.query(Rent).options(selectinload(Rent.host), selectinload(Rent.reviews), selectinload(Rent.amenities))
    if host_id:
        q = q.filter(Rent.host_id == host_id)
    if property_type:
        q = q.filter(Rent.property_type == property_type)
    if city:
        q = q.filter(Rent.location["city"].as_string() == city)
    if country:
        q = q.filter(Rent.location["country"].as_string() == country)
    if max_guests is not None:
        q = q.filter(Rent.max_guests == max_guests)
    return q.order_by(Rent.created_at.asc()).all()

@router.get("/recent", response_model=List[RentOut])
def recent_rents(db: Session = Depends(get_db)):
    return (
        db.query(Rent)
        .options(selectinload(Rent.host), selectinload(Rent.amenities))
        .order_by(Rent.created_at.desc())
        .limit(RECENT_LIMIT)
        .all()
    )

@router.get("/{id}", response_model=RentDetailOut)
def get_rent(id: str, db: Session = Depends(get_db)):
    return get_rent_or_404(
        db, id,
        selectinload(Rent.host), selectinload(Rent.reviews),
        selectinload(Rent.amenities), selectinload(Rent.bookings),
    )

@router.post("", response_model=RentOut, status_code=201)
def create_rent(payload: RentCreateIn, token: dict = Depends(require_host), db: Session = Depends(get_db)):
    ensure_host(payload.host_id, token)
    if not db.get(User, payload.host_id):
        raise HTTPException(status_code=400, detail="Host not found")
    data = payload.model_dump(exclude={"location", "availability", "amenities"}, exclude_none=True)
    rent = Rent(
        **data,
        location=dump_document(payload.location, exclude_none=True),
        availability=[dump_document(w) for w in payload.availability],
        amenities=resolve_amenities(db, payload.amenities),
    )
    db.add(rent)
    db.commit()
    db.refresh(rent)
    logger.info("Created long-term stay %s for host %s", rent.id, rent.host_id)
    return rent

@router.put("/{id}", response_model=RentOut)
def update_rent(id: str, payload: RentUpdateIn, token: dict = Depends(require_host), db: Session = Depends(get_db)):
    rent = get_rent_or_404(db, id)
    ensure_host(rent.host_id, token)
    data = payload.model_dump(exclude_unset=True)
    if "location" in data:
        data["location"] = dump_document(payload.location, exclude_none=True)
    if "availability" in data:
        data["availability"] = [dump_document(w) for w in payload.availability or []]
    if "amenities" in data:
        data["amenities"] = resolve_amenities(db, payload.amenities or [])
    for field, value in data.items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(rent, field, value)
    db.commit()
    db.refresh(rent)
    return rent

@router.delete("/{id}", response_model=MessageOut)
def delete_rent(id: str, token: dict = Depends(require_host), db: Session = Depends(get_db)):
    rent = get_rent_or_404(db, id)
    ensure_host(rent.host_id, token)
    db.delete(rent)
    db.commit()
    logger.info("Deleted long-term stay %s", id)
    return {"message": "Long-term stay deleted successfully"}

@router.post("/{id}/like", response_model=RentOut)
def like_rent(id: str, payload: LikeIn, db: Session = Depends(get_db)):
    rent = get_rent_or_404(db, id)
    if payload.user_id not in (rent.likes or []):
        rent.likes = [*(rent.likes or []), payload.user_id]
        db.commit()
        db.refresh(rent)
    return rent

@router.delete("/{id}/unlike/{user_id}", response_model=RentOut)
def unlike_rent(id: str, user_id: str, db: Session = Depends(get_db)):
    rent = get_rent_or_404(db, id)
    rent.likes = [u for u in (rent.likes or []) if u != user_id]
    db.commit()
    db.refresh(rent)
    return rent
