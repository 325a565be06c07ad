import logging
from datetime import datetime
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Destination
from ..schemas import CamelModel, MessageOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/destinations", tags=["destinations"])

# ==== Schemas ====

class DestinationOut(CamelModel):
    id: str
    name: str
    country: str
    description: Optional[str] = None
    photos: List[str] = []
    cover: Optional[str] = None
    discount: Optional[float] = None
    price: Optional[float] = None
    guide: Optional[str] = None
    rating: Optional[float] = None
    overview: Optional[str] = None
    likes: List[str] = []
    comments: List[str] = []
    created_at: Optional[datetime] = None

class DestinationCreateIn(CamelModel):
    name: str = Field(min_length=1)
    country: str = Field(min_length=1)
    description: Optional[str] = None
    photos: List[str] = []
    cover: Optional[str] = None
    price: Optional[float] = None
    rating: Optional[float] = None

class DestinationUpdateIn(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    country: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    photos: Optional[List[str]] = None
    cover: Optional[str] = None
    discount: Optional[float] = None
    price: Optional[float] = None
    guide: Optional[str] = None
    rating: Optional[float] = None
    overview: Optional[str] = None
    likes: Optional[List[str]] = None
    comments: Optional[List[str]] = None

class LikeIn(CamelModel):
    user_id: str = Field(min_length=1)

# ==== Helpers ====

def get_destination_or_404(db: Session, destination_id: str) -> Destination:
    destination = db.get(Destination, destination_id)
    if not destination:
        raise HTTPException(status_code=404, detail="Destination not found")
    return destination

# ==== Endpoints ====

@router.get("", response_model=List[DestinationOut])
def list_destinations(db: Session = Depends(get_db)):
    return db.query(Destination).order_by(Destination.created_at.asc()).all()

@router.get("/{id}", response_model=DestinationOut)
def get_destination(id: str, db: Session = Depends(get_db)):
    return get_destination_or_404(db, id)

@router.post("", response_model=DestinationOut, status_code=201)
def create_destination(payload: DestinationCreateIn, db: Session = Depends(get_db)):
    # Marketing fields (guide, overview, discount) are curated through updates only
    destination = Destination(**payload.model_dump())
    db.add(destination)
    db.commit()
    db.refresh(destination)
    logger.info("Created destination %s (%s)", destination.name, destination.id)
    return destination

@router.put("/{id}", response_model=DestinationOut)
def update_destination(id: str, payload: DestinationUpdateIn, db: Session = Depends(get_db)):
    destination = get_destination_or_404(db, id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "country", "photos", "likes", "comments"):
            continue
        setattr(destination, field, value)
    db.commit()
    db.refresh(destination)
    return destination

@router.delete("/{id}", response_model=MessageOut)
def delete_destination(id: str, db: Session = Depends(get_db)):
    destination = get_destination_or_404(db, id)
    db.delete(destination)
    db.commit()
    logger.info("Deleted destination %s", id)
    return {"message": "Destination deleted successfully"}

@router.post("/{id}/like", response_model=DestinationOut)
def like_destination(id: str, payload: LikeIn, db: Session = Depends(get_db)):
    destination = get_destination_or_404(db, id)
    if payload.user_id not in (destination.likes or []):
        destination.likes = [*(destination.likes or []), payload.user_id]
        db.commit()
        db.refresh(destination)
    return destination

@router.delete("/{id}/unlike/{user_id}", response_model=DestinationOut)
def unlike_destination(id: str, user_id: str, db: Session = Depends(get_db)):
    destination = get_destination_or_404(db, id)
    destination.likes = [u for u in (destination.likes or []) if u != user_id]
    db.commit()
    db.refresh(destination)
    return destination
