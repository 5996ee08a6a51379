"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification (payload: userId, userType, exp)
- FastAPI dependencies for protected routes

Tokens are trusted as issued: the user is not re-read from storage, so a
changed userType only takes effect after the next login.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext

from jobboard.core.config import Settings, get_settings
from jobboard.models import User, UserType

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor (missing header handled below as 401)
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    data: dict,
    settings: Optional[Settings] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create JWT access token."""
    settings = settings or get_settings()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_user_token(user: User, settings: Optional[Settings] = None) -> str:
    """Token carrying the user's id and role."""
    return create_access_token({"userId": user.id, "userType": user.user_type.value}, settings)


def decode_token(token: str, settings: Optional[Settings] = None) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def get_app_settings(request: Request) -> Settings:
    """Dependency - settings the running app was built with."""
    return request.app.state.settings


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    """
    FastAPI dependency - Get current authenticated user from the bearer token.

    Usage:
        @router.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user["user_id"], user["user_type"]
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials, settings)
    if not payload:
        raise credentials_exception

    user_id = payload.get("userId")
    user_type = payload.get("userType")
    if not user_id or user_type not in (UserType.employer.value, UserType.job_seeker.value):
        raise credentials_exception

    return {"user_id": user_id, "user_type": user_type}


async def get_current_employer(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require employer role."""
    if user["user_type"] != UserType.employer.value:
        raise HTTPException(status_code=403, detail="Employers only")
    return user


async def get_current_job_seeker(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require job seeker role."""
    if user["user_type"] != UserType.job_seeker.value:
        raise HTTPException(status_code=403, detail="Job seekers only")
    return user
