import logging
from fastapi import APIRouter, Depends, Request, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from ..limiter import limiter
from ..models import User
from ..schemas import UserOut, Username
from ..security import hash_password, verify_password, create_token, require_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

# ==== Schemas ====

class RegisterIn(BaseModel):
    username: Username
    email: str = Field(pattern=r".+@.+\..+")
    password: str = Field(min_length=1)

class RegisterOut(BaseModel):
    message: str
    userId: str
    username: str
    email: str

class LoginIn(BaseModel):
    username: Username
    password: str = Field(min_length=1)

class LoginOut(RegisterOut):
    token: str

# ==== Endpoints ====

@router.post("/register", response_model=RegisterOut, status_code=201)
@limiter.limit(settings.RATE_LIMIT_AUTH_API)
def register(request: Request, payload: RegisterIn, db: Session = Depends(get_db)):
    username = payload.username
    exists = db.query(User).filter(or_(User.username == username, User.email == payload.email)).first()
    if exists:
        raise HTTPException(status_code=400, detail="Username or email already exists")
    user = User(username=username, email=payload.email, hashed_password=hash_password(payload.password))
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.username, user.id)
    return {"message": "User registered successfully", "userId": user.id, "username": user.username, "email": user.email}

@router.post("/login", response_model=LoginOut)
@limiter.limit(settings.RATE_LIMIT_AUTH_API)
def login(request: Request, payload: LoginIn, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == payload.username).first()
    if not user:
        logger.info("Login failed: unknown user %s", payload.username)
        raise HTTPException(status_code=401, detail="User not found")
    if not verify_password(payload.password, user.hashed_password):
        logger.info("Login failed: bad password for %s", payload.username)
        raise HTTPException(status_code=401, detail="Invalid password")
    return {
        "message": "Login successful",
        "token": create_token(user.id, user.username),
        "userId": user.id,
        "username": user.username,
        "email": user.email,
    }

@router.get("/me", response_model=UserOut)
def me(token: dict = Depends(require_token), db: Session = Depends(get_db)):
    user = db.get(User, token["userId"])
    if not user:
        raise HTTPException(status_code=401, detail="Authentication failed.")
    return user
