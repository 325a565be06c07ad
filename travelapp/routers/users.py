import logging
from datetime import datetime
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from ..db import get_db
from ..models import User, BookingStatus
from ..schemas import (
    CamelModel, MessageOut, UserOut, RentSummary, Address, PaymentMethod, Username, dump_document,
)
from ..security import require_owner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])

# ==== Schemas ====

class ListedPropertyOut(RentSummary):
    price: float
    max_guests: int
    created_at: Optional[datetime] = None

class UserBookingOut(CamelModel):
    id: str
    property_id: str
    check_in_date: datetime
    check_out_date: datetime
    number_of_nights: Optional[int] = None
    status: BookingStatus

class UserReviewOut(CamelModel):
    id: str
    property_id: str
    rating: int
    title: Optional[str] = None
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

class UserDetailOut(UserOut):
    listed_properties: List[ListedPropertyOut] = []
    bookings: List[UserBookingOut] = []
    reviews: List[UserReviewOut] = []

class UserUpdateIn(CamelModel):
    username: Optional[Username] = None
    email: Optional[str] = Field(default=None, pattern=r".+@.+\..+")
    # Accepted only so it can be rejected explicitly
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    profile_picture: Optional[str] = None
    bio: Optional[str] = None
    address: Optional[Address] = None
    is_host: Optional[bool] = None
    host_rating: Optional[float] = Field(default=None, ge=0, le=5)
    is_verified: Optional[bool] = None
    is_superhost: Optional[bool] = None
    payment_methods: Optional[List[PaymentMethod]] = None

class WatchlistIn(CamelModel):
    item_id: str = Field(min_length=1)

class LikeIn(CamelModel):
    property_id: str = Field(min_length=1)

# ==== Helpers ====

def get_user_or_404(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

# ==== Endpoints ====

@router.get("", response_model=List[UserOut])
def list_users(db: Session = Depends(get_db)):
    return db.query(User).order_by(User.created_at.asc()).all()

@router.get("/{id}", response_model=UserDetailOut)
def get_user(id: str, db: Session = Depends(get_db)):
    user = (
        db.query(User)
        .options(selectinload(User.listed_properties), selectinload(User.bookings), selectinload(User.reviews))
        .filter(User.id == id)
        .first()
    )
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

@router.put("/{id}", response_model=UserOut, dependencies=[Depends(require_owner)])
def update_user(id: str, payload: UserUpdateIn, db: Session = Depends(get_db)):
    if payload.password is not None:
        raise HTTPException(status_code=400, detail="Cannot update password through this endpoint")
    user = get_user_or_404(db, id)
    data = payload.model_dump(exclude_unset=True, exclude={"password"})
    for required in ("username", "email"):
        if required in data and data[required] is None:
            data.pop(required)
    clashes = []
    if data.get("username"):
        clashes.append(User.username == data["username"])
    if data.get("email"):
        clashes.append(User.email == data["email"])
    if clashes and db.query(User).filter(User.id != id, or_(*clashes)).first():
        raise HTTPException(status_code=400, detail="Username or email already exists")
    # Embedded documents go back into their JSON columns as dumped dicts
    if "address" in data:
        data["address"] = dump_document(payload.address, exclude_none=True)
    if "payment_methods" in data:
        data["payment_methods"] = [dump_document(m, exclude_none=True) for m in payload.payment_methods or []]
    for field, value in data.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user

@router.delete("/{id}", response_model=MessageOut, dependencies=[Depends(require_owner)])
def delete_user(id: str, db: Session = Depends(get_db)):
    user = get_user_or_404(db, id)
    db.delete(user)
    db.commit()
    logger.info("Deleted user %s", id)
    return {"message": "User deleted successfully"}

# ==== Watchlist & likes ====

@router.post("/{id}/watchlist", response_model=UserOut, dependencies=[Depends(require_owner)])
def add_to_watchlist(id: str, payload: WatchlistIn, db: Session = Depends(get_db)):
    user = get_user_or_404(db, id)
    entry = {"id": payload.item_id}
    if entry not in (user.watchlist or []):
        user.watchlist = [*(user.watchlist or []), entry]
        db.commit()
        db.refresh(user)
    return user

@router.delete("/{id}/watchlist/{item_id}", response_model=UserOut, dependencies=[Depends(require_owner)])
def remove_from_watchlist(id: str, item_id: str, db: Session = Depends(get_db)):
    user = get_user_or_404(db, id)
    user.watchlist = [w for w in (user.watchlist or []) if w.get("id") != item_id]
    db.commit()
    db.refresh(user)
    return user

@router.post("/{id}/likes", response_model=UserOut, dependencies=[Depends(require_owner)])
def add_like(id: str, payload: LikeIn, db: Session = Depends(get_db)):
    user = get_user_or_404(db, id)
    if payload.property_id not in (user.likes or []):
        user.likes = [*(user.likes or []), payload.property_id]
        db.commit()
        db.refresh(user)
    return user

@router.delete("/{id}/likes/{property_id}", response_model=UserOut, dependencies=[Depends(require_owner)])
def remove_like(id: str, property_id: str, db: Session = Depends(get_db)):
    user = get_user_or_404(db, id)
    user.likes = [p for p in (user.likes or []) if p != property_id]
    db.commit()
    db.refresh(user)
    return user

@router.get("/{id}/watchlist", response_model=List[dict])
def get_watchlist(id: str, db: Session = Depends(get_db)):
    return get_user_or_404(db, id).watchlist or []

@router.get("/{id}/likes", response_model=List[str])
def get_likes(id: str, db: Session = Depends(get_db)):
    return get_user_or_404(db, id).likes or []
