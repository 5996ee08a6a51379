"""
Entity models kept by the storage engine.

Field names are snake_case in Python and camelCase on the wire
(firstName, jobType, isActive, ...).
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model: accepts snake_case or camelCase input, dumps camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# ENUMS
# ============================================================

class UserType(str, Enum):
    job_seeker = "job_seeker"
    employer = "employer"


class JobType(str, Enum):
    full_time = "full_time"
    part_time = "part_time"
    remote = "remote"
    freelance = "freelance"


class ExperienceLevel(str, Enum):
    entry = "entry"
    junior = "junior"
    mid = "mid"
    senior = "senior"


class ApplicationStatus(str, Enum):
    pending = "pending"
    reviewing = "reviewing"
    interview = "interview"
    accepted = "accepted"
    rejected = "rejected"


# ============================================================
# RECORDS
# ============================================================

class User(CamelModel):
    id: str
    email: str
    password: str  # bcrypt hash, never serialized to clients
    first_name: str
    last_name: str
    user_type: UserType = UserType.job_seeker
    resume_url: Optional[str] = None
    profile_data: Optional[Dict[str, Any]] = None
    created_at: datetime


class Company(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    industry: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    employer_id: str
    created_at: datetime


class Job(CamelModel):
    id: str
    title: str
    description: str
    location: str
    job_type: JobType
    experience_level: ExperienceLevel
    min_salary: Optional[int] = None
    max_salary: Optional[int] = None
    skills: Optional[List[str]] = None
    company_id: str
    employer_id: str
    is_active: bool = True
    created_at: datetime


class Application(CamelModel):
    id: str
    job_id: str
    applicant_id: str
    cover_letter: Optional[str] = None
    status: ApplicationStatus = ApplicationStatus.pending
    applied_at: datetime


# ============================================================
# JOINED READ VIEWS (computed at read time, never stored)
# ============================================================

class JobWithCompany(Job):
    company: Company


class ApplicationWithJob(Application):
    job: JobWithCompany


class JobFilters(CamelModel):
    """Optional, independently combinable filters for job search."""

    search: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    experience_level: Optional[ExperienceLevel] = None
    min_salary: Optional[int] = None
    max_salary: Optional[int] = None
    skills: Optional[List[str]] = None
