import logging
from datetime import datetime
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Amenity, AmenityCategory
from ..schemas import CamelModel, MessageOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/amenities", tags=["amenities"])

# ==== Schemas ====

class AmenityOut(CamelModel):
    id: str
    name: str
    category: AmenityCategory
    icon: Optional[str] = None
    description: Optional[str] = None
    is_popular: bool = False
    created_at: Optional[datetime] = None

class AmenityCreateIn(CamelModel):
    name: str = Field(min_length=1)
    category: AmenityCategory
    icon: Optional[str] = None
    description: Optional[str] = None
    is_popular: bool = False

class AmenityUpdateIn(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[AmenityCategory] = None
    icon: Optional[str] = None
    description: Optional[str] = None
    is_popular: Optional[bool] = None

# ==== Helpers ====

def get_amenity_or_404(db: Session, amenity_id: str) -> Amenity:
    amenity = db.get(Amenity, amenity_id)
    if not amenity:
        raise HTTPException(status_code=404, detail="Amenity not found")
    return amenity

def _set_popular(db: Session, amenity_id: str, popular: bool) -> Amenity:
    amenity = get_amenity_or_404(db, amenity_id)
    amenity.is_popular = popular
    db.commit()
    db.refresh(amenity)
    return amenity

# ==== Endpoints ====

@router.get("", response_model=List[AmenityOut])
def list_amenities(db: Session = Depends(get_db)):
    return db.query(Amenity).order_by(Amenity.name.asc()).all()

@router.get("/category/{category}", response_model=List[AmenityOut])
def amenities_by_category(category: str, db: Session = Depends(get_db)):
    try:
        wanted = AmenityCategory(category)
    except ValueError:
        wanted = None
    amenities = db.query(Amenity).filter(Amenity.category == wanted).order_by(Amenity.name.asc()).all() if wanted else []
    if not amenities:
        raise HTTPException(status_code=404, detail="No amenities found for this category")
    return amenities

@router.get("/popular/true", response_model=List[AmenityOut])
def popular_amenities(db: Session = Depends(get_db)):
    return db.query(Amenity).filter(Amenity.is_popular == True).order_by(Amenity.name.asc()).all()

@router.get("/{id}", response_model=AmenityOut)
def get_amenity(id: str, db: Session = Depends(get_db)):
    return get_amenity_or_404(db, id)

@router.post("", response_model=AmenityOut, status_code=201)
def create_amenity(payload: AmenityCreateIn, db: Session = Depends(get_db)):
    name = payload.name.strip()
    if db.query(Amenity).filter(Amenity.name == name).first():
        raise HTTPException(status_code=400, detail="Amenity already exists")
    amenity = Amenity(**payload.model_dump(exclude={"name"}), name=name)
    db.add(amenity)
    db.commit()
    db.refresh(amenity)
    logger.info("Created amenity %s (%s)", amenity.name, amenity.id)
    return amenity

@router.put("/{id}", response_model=AmenityOut)
def update_amenity(id: str, payload: AmenityUpdateIn, db: Session = Depends(get_db)):
    amenity = get_amenity_or_404(db, id)
    data = payload.model_dump(exclude_unset=True)
    if data.get("name"):
        data["name"] = data["name"].strip()
        if db.query(Amenity).filter(Amenity.id != id, Amenity.name == data["name"]).first():
            raise HTTPException(status_code=400, detail="Amenity already exists")
    for field, value in data.items():
        if value is None and field in ("name", "category", "is_popular"):
            continue
        setattr(amenity, field, value)
    db.commit()
    db.refresh(amenity)
    return amenity

@router.delete("/{id}", response_model=MessageOut)
def delete_amenity(id: str, db: Session = Depends(get_db)):
    amenity = get_amenity_or_404(db, id)
    db.delete(amenity)
    db.commit()
    logger.info("Deleted amenity %s", id)
    return {"message": "Amenity deleted successfully"}

@router.post("/{id}/popular", response_model=AmenityOut)
def mark_popular(id: str, db: Session = Depends(get_db)):
    return _set_popular(db, id, True)

@router.post("/{id}/unpopular", response_model=AmenityOut)
def unmark_popular(id: str, db: Session = Depends(get_db)):
    return _set_popular(db, id, False)
