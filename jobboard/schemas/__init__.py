"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: Internal data structures (stored records)
- Schemas: API contract (what client sends/receives)
"""

from jobboard.schemas.schemas import (
    RegisterRequest, LoginRequest, UserResponse, AuthResponse,
    ProfileUpdate, CompanyCreate, JobCreate, JobUpdate,
    ApplicationCreate, ApplicationUpdate, MessageResponse, HealthResponse,
)

__all__ = [
    "RegisterRequest", "LoginRequest", "UserResponse", "AuthResponse",
    "ProfileUpdate", "CompanyCreate", "JobCreate", "JobUpdate",
    "ApplicationCreate", "ApplicationUpdate", "MessageResponse", "HealthResponse",
]
