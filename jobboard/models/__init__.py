"""
Models module - Pydantic models for the stored entities.

Difference from schemas:
- Models: the records the storage engine keeps (User, Company, Job, Application)
  and the joined read views built from them.
- Schemas: API contract (what client sends/receives)
"""

from jobboard.models.entities import (
    CamelModel,
    UserType, JobType, ExperienceLevel, ApplicationStatus,
    User, Company, Job, Application,
    JobWithCompany, ApplicationWithJob, JobFilters,
)

__all__ = [
    "CamelModel",
    "UserType", "JobType", "ExperienceLevel", "ApplicationStatus",
    "User", "Company", "Job", "Application",
    "JobWithCompany", "ApplicationWithJob", "JobFilters",
]
