import logging
from datetime import datetime
from typing import Annotated, Optional, List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field
from sqlalchemy.orm import Session, selectinload

from ..db import get_db
from ..models import Review, StayTerm
from ..schemas import CamelModel, MessageOut, UserSummary, RentSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reviews", tags=["reviews"])

SubRating = Optional[Annotated[int, Field(ge=1, le=5)]]
Rating = Optional[Annotated[float, Field(ge=1, le=5)]]

# ==== Schemas ====

class ReviewOut(CamelModel):
    id: str
    property_id: str
    property: Optional[RentSummary] = None
    property_type: StayTerm
    user_id: str
    user: Optional[UserSummary] = None
    host_id: str
    host: Optional[UserSummary] = None
    rating: float
    title: Optional[str] = None
    comment: Optional[str] = None
    cleanliness: Optional[int] = None
    communication: Optional[int] = None
    location: Optional[int] = None
    accuracy: Optional[int] = None
    photos: List[str] = []
    verified: bool = False
    helpful: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ReviewCreateIn(CamelModel):
    property_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    host_id: str = Field(min_length=1)
    rating: float
    property_type: StayTerm = StayTerm.LONG_TERM
    title: Optional[str] = None
    comment: Optional[str] = None
    cleanliness: SubRating = None
    communication: SubRating = None
    location: SubRating = None
    accuracy: SubRating = None
    photos: List[str] = []
    verified: bool = False

class ReviewUpdateIn(CamelModel):
    rating: Rating = None
    title: Optional[str] = None
    comment: Optional[str] = None
    cleanliness: SubRating = None
    communication: SubRating = None
    location: SubRating = None
    accuracy: SubRating = None
    photos: Optional[List[str]] = None
    verified: Optional[bool] = None

# ==== Helpers ====

def _populated():
    return (selectinload(Review.user), selectinload(Review.host), selectinload(Review.property))

def get_review_or_404(db: Session, review_id: str, *options) -> Review:
    review = db.query(Review).options(*options).filter(Review.id == review_id).first()
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    return review

# ==== Endpoints ====

@router.get("", response_model=List[ReviewOut])
def list_reviews(db: Session = Depends(get_db)):
    return db.query(Review).options(*_populated()).order_by(Review.created_at.asc()).all()

@router.get("/property/{property_id}", response_model=List[ReviewOut])
def reviews_for_property(property_id: str, db: Session = Depends(get_db)):
    return (
        db.query(Review)
        .options(selectinload(Review.user), selectinload(Review.host))
        .filter(Review.property_id == property_id)
        .order_by(Review.created_at.desc())
        .all()
    )

@router.get("/user/{user_id}", response_model=List[ReviewOut])
def reviews_by_user(user_id: str, db: Session = Depends(get_db)):
    return (
        db.query(Review)
        .options(selectinload(Review.property))
        .filter(Review.user_id == user_id)
        .order_by(Review.created_at.desc())
        .all()
    )

@router.get("/{id}", response_model=ReviewOut)
def get_review(id: str, db: Session = Depends(get_db)):
    return get_review_or_404(db, id, *_populated())

@router.post("", response_model=ReviewOut, status_code=201)
def create_review(payload: ReviewCreateIn, db: Session = Depends(get_db)):
    if payload.rating < 1 or payload.rating > 5:
        raise HTTPException(status_code=400, detail="Rating must be between 1 and 5")
    existing = db.query(Review).filter(Review.property_id == payload.property_id, Review.user_id == payload.user_id).first()
    if existing:
        raise HTTPException(status_code=400, detail="You have already reviewed this property")
    review = Review(**payload.model_dump())
    db.add(review)
    db.commit()
    db.refresh(review)
    logger.info("Created review %s for property %s", review.id, review.property_id)
    return review

@router.put("/{id}", response_model=ReviewOut)
def update_review(id: str, payload: ReviewUpdateIn, db: Session = Depends(get_db)):
    review = get_review_or_404(db, id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field in ("rating", "photos", "verified"):
            continue
        setattr(review, field, value)
    db.commit()
    db.refresh(review)
    return review

@router.delete("/{id}", response_model=MessageOut)
def delete_review(id: str, db: Session = Depends(get_db)):
    review = get_review_or_404(db, id)
    db.delete(review)
    db.commit()
    logger.info("Deleted review %s", id)
    return {"message": "Review deleted successfully"}

@router.post("/{id}/helpful", response_model=ReviewOut)
def mark_helpful(id: str, db: Session = Depends(get_db)):
    review = get_review_or_404(db, id)
    # Atomic increment
    review.helpful = Review.helpful + 1
    db.commit()
    db.refresh(review)
    return review
