"""
Authentication Routes

POST /auth/register - Register new user, returns {user, token}
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
"""

import logging

from fastapi import APIRouter, HTTPException, Depends

from jobboard.core.auth import (
    hash_password, verify_password, create_user_token, get_current_user, get_app_settings
)
from jobboard.core.config import Settings
from jobboard.db import MemoryStorage, get_storage
from jobboard.schemas import RegisterRequest, LoginRequest, AuthResponse, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    storage: MemoryStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    """
    Register a new user account.

    The response already carries a token, no separate login needed.
    """
    if await storage.get_user_by_email(request.email):
        raise HTTPException(status_code=409, detail="User already exists")

    data = request.model_dump()
    data["password"] = hash_password(request.password)
    user = await storage.create_user(data)

    logger.info("Registered %s %s", user.user_type.value, user.id)
    return AuthResponse(
        user=UserResponse.from_user(user),
        token=create_user_token(user, settings),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    storage: MemoryStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = await storage.get_user_by_email(request.email)

    if not user or not verify_password(request.password, user.password):
        logger.info("Failed login for %s", request.email)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    logger.info("User %s logged in", user.id)
    return AuthResponse(
        user=UserResponse.from_user(user),
        token=create_user_token(user, settings),
    )


@router.get("/me", response_model=UserResponse)
async def get_me(
    user: dict = Depends(get_current_user),
    storage: MemoryStorage = Depends(get_storage),
):
    """Get current authenticated user's info."""
    record = await storage.get_user(user["user_id"])
    if not record:
        raise HTTPException(status_code=404, detail="User not found")

    return UserResponse.from_user(record)
