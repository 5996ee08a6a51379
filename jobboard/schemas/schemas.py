"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Wire names are camelCase (see jobboard.models.CamelModel).
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import EmailStr, Field, model_validator

from jobboard.models import (
    CamelModel, User, UserType, JobType, ExperienceLevel, ApplicationStatus,
)


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    user_type: UserType = UserType.job_seeker
    resume_url: Optional[str] = None
    profile_data: Optional[Dict[str, Any]] = None

class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)

class UserResponse(CamelModel):
    """User as seen by clients: everything except the password hash."""
    id: str
    email: str
    first_name: str
    last_name: str
    user_type: UserType
    resume_url: Optional[str] = None
    profile_data: Optional[Dict[str, Any]] = None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls.model_validate(user.model_dump(exclude={"password"}))

class AuthResponse(CamelModel):
    user: UserResponse
    token: str


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileUpdate(CamelModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    resume_url: Optional[str] = None
    profile_data: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def names_not_null(self):
        for field in ("first_name", "last_name"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    industry: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None


# ============================================================
# JOB SCHEMAS
# ============================================================

def _check_salary_range(min_salary: Optional[int], max_salary: Optional[int]) -> None:
    if min_salary is not None and max_salary is not None and min_salary > max_salary:
        raise ValueError("minSalary cannot exceed maxSalary")


class JobCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    job_type: JobType
    experience_level: ExperienceLevel
    min_salary: Optional[int] = Field(None, ge=0)
    max_salary: Optional[int] = Field(None, ge=0)
    skills: Optional[List[str]] = None
    company_id: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def salary_range(self):
        _check_salary_range(self.min_salary, self.max_salary)
        return self

class JobUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    job_type: Optional[JobType] = None
    experience_level: Optional[ExperienceLevel] = None
    min_salary: Optional[int] = Field(None, ge=0)
    max_salary: Optional[int] = Field(None, ge=0)
    skills: Optional[List[str]] = None
    company_id: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def required_fields_not_null(self):
        # Salaries and skills may be cleared; everything else is required on a Job
        for field in ("title", "description", "location", "job_type",
                      "experience_level", "company_id", "is_active"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        _check_salary_range(self.min_salary, self.max_salary)
        return self


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(CamelModel):
    cover_letter: Optional[str] = None

class ApplicationUpdate(CamelModel):
    status: Optional[ApplicationStatus] = None
    cover_letter: Optional[str] = None

    @model_validator(mode="after")
    def status_not_null(self):
        if "status" in self.model_fields_set and self.status is None:
            raise ValueError("status cannot be null")
        return self


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(CamelModel):
    message: str
    success: bool = True

class HealthResponse(CamelModel):
    status: str
    counts: Dict[str, int]
