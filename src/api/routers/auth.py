import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.dependencies import get_user_store
from api.security import create_access_token, get_current_user, hash_password, verify_password
from storage.user_store import UserExistsError, UserStore
from taskmind.models import User, UserPublic

router = APIRouter(prefix="/api/auth")
logger = logging.getLogger(__name__)


class RegisterIn(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


class LoginIn(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthOut(BaseModel):
    message: str
    token: str
    user: UserPublic


@router.post("/register", status_code=201, response_model=AuthOut)
def register(payload: RegisterIn, user_store: UserStore = Depends(get_user_store)) -> AuthOut:
    """Create an account and return a bearer token for it."""
    try:
        user = user_store.create(payload.email, payload.name, hash_password(payload.password))
    except UserExistsError:
        logger.info(f"Registration rejected, user exists: {payload.email}")
        raise HTTPException(status_code=400, detail="User already exists")

    logger.info(f"User created: {user.email}")
    return AuthOut(
        message="User created successfully",
        token=create_access_token(user.id, user.email),
        user=user.public(),
    )


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, user_store: UserStore = Depends(get_user_store)) -> AuthOut:
    user = user_store.find_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=400, detail="Invalid credentials")

    return AuthOut(
        message="Login successful",
        token=create_access_token(user.id, user.email),
        user=user.public(),
    )


@router.get("/profile", response_model=UserPublic)
def profile(user: User = Depends(get_current_user)) -> UserPublic:
    return user.public()
