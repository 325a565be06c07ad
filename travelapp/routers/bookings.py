import logging
from datetime import datetime
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field
from sqlalchemy.orm import Session, selectinload

from ..db import get_db
from ..models import Booking, BookingStatus, StayTerm
from ..schemas import CamelModel, MessageOut, UserSummary, RentSummary, dump_document
from ..services.pricing import count_nights, fill_pricing, to_naive_utc
from .long_term_stays import RentOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["bookings"])

# ==== Schemas ====

class Pricing(CamelModel):
    price_per_night: Optional[float] = Field(default=None, ge=0)
    number_of_nights: Optional[int] = Field(default=None, ge=0)
    subtotal: Optional[float] = None
    service_fee: Optional[float] = None
    cleaning_fee: Optional[float] = None
    tax: Optional[float] = None
    total: float = Field(gt=0)

class BookingOut(CamelModel):
    id: str
    property_id: str
    property: Optional[RentSummary] = None
    property_type: StayTerm
    guest_id: str
    guest: Optional[UserSummary] = None
    host_id: str
    host: Optional[UserSummary] = None
    check_in_date: datetime
    check_out_date: datetime
    number_of_guests: int
    number_of_nights: Optional[int] = None
    status: BookingStatus
    pricing: Pricing
    special_requests: Optional[str] = None
    cancellation_reason: Optional[str] = None
    cancellation_date: Optional[datetime] = None
    refund_amount: Optional[float] = None
    guest_notes: Optional[str] = None
    host_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class BookingDetailOut(BookingOut):
    property: Optional[RentOut] = None

class BookingCreateIn(CamelModel):
    property_id: str = Field(min_length=1)
    guest_id: str = Field(min_length=1)
    host_id: str = Field(min_length=1)
    check_in_date: datetime
    check_out_date: datetime
    number_of_guests: int = Field(gt=0)
    pricing: Pricing
    property_type: StayTerm = StayTerm.LONG_TERM
    special_requests: Optional[str] = None
    guest_notes: Optional[str] = None
    host_notes: Optional[str] = None

class BookingUpdateIn(CamelModel):
    check_in_date: Optional[datetime] = None
    check_out_date: Optional[datetime] = None
    number_of_guests: Optional[int] = Field(default=None, gt=0)
    pricing: Optional[Pricing] = None
    property_type: Optional[StayTerm] = None
    status: Optional[BookingStatus] = None
    special_requests: Optional[str] = None
    cancellation_reason: Optional[str] = None
    refund_amount: Optional[float] = None
    guest_notes: Optional[str] = None
    host_notes: Optional[str] = None

class CancelIn(CamelModel):
    cancellation_reason: Optional[str] = None
    refund_amount: Optional[float] = Field(default=None, ge=0)

# ==== Helpers ====

def _summaries():
    return (selectinload(Booking.property), selectinload(Booking.guest), selectinload(Booking.host))

def get_booking_or_404(db: Session, booking_id: str, *options) -> Booking:
    booking = db.query(Booking).options(*options).filter(Booking.id == booking_id).first()
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking

def _check_dates(check_in: datetime, check_out: datetime) -> None:
    if check_in >= check_out:
        raise HTTPException(status_code=400, detail="Check-out date must be after check-in date")

def _set_status(db: Session, booking_id: str, status: BookingStatus, **fields) -> Booking:
    # No transition guard: the caller decides the status
    booking = get_booking_or_404(db, booking_id)
    booking.status = status
    for field, value in fields.items():
        setattr(booking, field, value)
    db.commit()
    db.refresh(booking)
    logger.info("Booking %s is now %s", booking.id, status.value)
    return booking

# ==== Endpoints ====

@router.get("", response_model=List[BookingOut])
def list_bookings(db: Session = Depends(get_db)):
    return db.query(Booking).options(*_summaries()).order_by(Booking.created_at.asc()).all()

@router.get("/guest/{guest_id}", response_model=List[BookingOut])
def bookings_for_guest(guest_id: str, db: Session = Depends(get_db)):
    return (
        db.query(Booking)
        .options(selectinload(Booking.property), selectinload(Booking.host))
        .filter(Booking.guest_id == guest_id)
        .order_by(Booking.check_in_date.desc())
        .all()
    )

@router.get("/host/{host_id}", response_model=List[BookingOut])
def bookings_for_host(host_id: str, db: Session = Depends(get_db)):
    return (
        db.query(Booking)
        .options(selectinload(Booking.property), selectinload(Booking.guest))
        .filter(Booking.host_id == host_id)
        .order_by(Booking.check_in_date.desc())
        .all()
    )

@router.get("/{id}", response_model=BookingDetailOut)
def get_booking(id: str, db: Session = Depends(get_db)):
    return get_booking_or_404(db, id, *_summaries())

@router.post("", response_model=BookingOut, status_code=201)
def create_booking(payload: BookingCreateIn, db: Session = Depends(get_db)):
    check_in = to_naive_utc(payload.check_in_date)
    check_out = to_naive_utc(payload.check_out_date)
    _check_dates(check_in, check_out)
    nights = count_nights(check_in, check_out)
    data = payload.model_dump(exclude={"pricing", "check_in_date", "check_out_date"}, exclude_none=True)
    booking = Booking(
        **data,
        check_in_date=check_in,
        check_out_date=check_out,
        number_of_nights=nights,
        pricing=fill_pricing(dump_document(payload.pricing, exclude_none=True), nights),
        status=BookingStatus.PENDING,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    logger.info("Created booking %s (%s nights) for property %s", booking.id, nights, booking.property_id)
    return booking

@router.put("/{id}", response_model=BookingOut)
def update_booking(id: str, payload: BookingUpdateIn, db: Session = Depends(get_db)):
    booking = get_booking_or_404(db, id)
    data = payload.model_dump(exclude_unset=True)
    for field in ("check_in_date", "check_out_date", "number_of_guests", "pricing", "property_type", "status"):
        if field in data and data[field] is None:
            data.pop(field)
    if "check_in_date" in data or "check_out_date" in data:
        check_in = to_naive_utc(data.get("check_in_date", booking.check_in_date))
        check_out = to_naive_utc(data.get("check_out_date", booking.check_out_date))
        _check_dates(check_in, check_out)
        data["check_in_date"] = check_in
        data["check_out_date"] = check_out
        data["number_of_nights"] = count_nights(check_in, check_out)
    if "pricing" in data:
        nights = data.get("number_of_nights", booking.number_of_nights) or 0
        data["pricing"] = fill_pricing(dump_document(payload.pricing, exclude_none=True), nights)
    elif "number_of_nights" in data:
        # New dates invalidate the stored breakdown's derived values
        stale = {k: v for k, v in (booking.pricing or {}).items() if k not in ("numberOfNights", "subtotal")}
        data["pricing"] = fill_pricing(stale, data["number_of_nights"])
    for field, value in data.items():
        setattr(booking, field, value)
    db.commit()
    db.refresh(booking)
    return booking

@router.post("/{id}/confirm", response_model=BookingOut)
def confirm_booking(id: str, db: Session = Depends(get_db)):
    return _set_status(db, id, BookingStatus.CONFIRMED)

@router.post("/{id}/complete", response_model=BookingOut)
def complete_booking(id: str, db: Session = Depends(get_db)):
    return _set_status(db, id, BookingStatus.COMPLETED)

@router.post("/{id}/cancel", response_model=BookingOut)
def cancel_booking(id: str, payload: Optional[CancelIn] = None, db: Session = Depends(get_db)):
    payload = payload or CancelIn()
    return _set_status(
        db, id, BookingStatus.CANCELLED,
        cancellation_reason=payload.cancellation_reason,
        cancellation_date=datetime.utcnow(),
        refund_amount=payload.refund_amount,
    )

@router.delete("/{id}", response_model=MessageOut)
def delete_booking(id: str, db: Session = Depends(get_db)):
    booking = get_booking_or_404(db, id)
    db.delete(booking)
    db.commit()
    logger.info("Deleted booking %s", id)
    return {"message": "Booking deleted successfully"}
