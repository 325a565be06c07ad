from typing import Optional
from passlib.context import CryptContext
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from fastapi import Request, Depends, HTTPException

from .config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
serializer = URLSafeTimedSerializer(settings.SECRET_KEY, salt="travelapp-auth")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def create_token(user_id: str, username: str) -> str:
    return serializer.dumps({"userId": user_id, "username": username})


def decode_token(token: str, max_age: Optional[int] = None) -> dict:
    """
    Returns the token payload ({"userId", "username"}).
    Raises SignatureExpired or BadSignature from itsdangerous.
    """
    if max_age is None:
        max_age = settings.TOKEN_MAX_AGE_SECONDS
    return serializer.loads(token, max_age=max_age)


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization")
    if not header:
        return None
    parts = header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        return None
    return parts[1]


def require_token(request: Request) -> dict:
    """
    Dependency for routes that need an authenticated caller.
    Attaches the decoded payload to request.state.user as well.
    """
    token = _bearer_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="No token provided. Access denied.")
    try:
        payload = decode_token(token)
    except SignatureExpired:
        raise HTTPException(status_code=401, detail="Token has expired. Please login again.")
    except BadSignature:
        raise HTTPException(status_code=401, detail="Invalid token. Access denied.")
    if not isinstance(payload, dict) or not payload.get("userId"):
        raise HTTPException(status_code=401, detail="Authentication failed.")
    request.state.user = payload
    return payload


def require_owner(id: str, token: dict = Depends(require_token)) -> dict:
    # The {id} path parameter must be the caller's own user id
    if id != token.get("userId"):
        raise HTTPException(status_code=403, detail="You don't have permission to perform this action.")
    return token


def require_host(token: dict = Depends(require_token)) -> dict:
    # Host verification against the listing itself is left to the handler
    return token
