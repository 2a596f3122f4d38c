"""
Password hashing and bearer-token handling.

Tokens are HS256 JWTs carrying the user id in ``sub``. A missing token is a
401; a token that fails verification is a 403, which is what the frontend
keys off to clear its stored session.
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from api.dependencies import get_user_store
from storage.user_store import UserStore
from taskmind.models import User

JWT_SECRET = os.getenv("JWT_SECRET", "taskmind-secret-key-change-in-production")
JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", str(24 * 7)))

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
security = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, stored: str) -> bool:
    try:
        return pwd_context.verify(password, stored)
    except ValueError:
        # not a hash this context recognizes
        return False


def create_access_token(user_id: str, email: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "iat": now,
        "exp": now + timedelta(hours=JWT_EXPIRATION_HOURS),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=403, detail="Invalid or expired token")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user_store: UserStore = Depends(get_user_store),
) -> User:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Access token required")

    payload = decode_access_token(credentials.credentials)
    user = user_store.get(str(payload.get("sub", "")))
    if user is None:
        raise HTTPException(status_code=403, detail="Invalid or expired token")
    return user
