"""
In-memory storage engine.

Holds users, companies, jobs and applications in plain dicts keyed by id.
One MemoryStorage instance is created at application startup and shared by
every request (see jobboard.main.create_app). Nothing survives a restart.

Contract:
- Lookups of a missing id return None (delete_job returns False).
- No method raises for missing rows; validation and authorization belong
  to the API layer.
- Joined views (JobWithCompany, ApplicationWithJob) are built at read time.
  Rows whose company or job has gone away are dropped from list results.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel

from jobboard.models import (
    User, Company, Job, Application,
    JobWithCompany, ApplicationWithJob, JobFilters, ApplicationStatus,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def _merge(model: Type[RecordT], record: RecordT, updates: dict) -> RecordT:
    """Shallow-merge updates onto a record and re-validate the whole result."""
    merged = record.model_dump()
    merged.update(updates)
    return model.model_validate(merged)


class MemoryStorage:
    """
    Volatile repository for the four job board entities.

    All operations are coroutines so callers can swap in a database-backed
    implementation without changing the route handlers.
    """

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.companies: Dict[str, Company] = {}
        self.jobs: Dict[str, Job] = {}
        self.applications: Dict[str, Application] = {}
        self._last_timestamp: Optional[datetime] = None

    def _new_id(self) -> str:
        return str(uuid.uuid4())

    def _now(self) -> datetime:
        """Current UTC time, strictly later than any timestamp issued before."""
        now = datetime.now(timezone.utc)
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    # ============================================================
    # USERS
    # ============================================================

    async def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    async def create_user(self, data: dict) -> User:
        """
        Store a new user.

        Args:
            data: user fields (password already hashed)

        Returns:
            The stored record with id and created_at assigned
        """
        user = User(**data, id=self._new_id(), created_at=self._now())
        self.users[user.id] = user
        logger.debug("Stored user %s", user.id)
        return user

    async def update_user(self, user_id: str, updates: dict) -> Optional[User]:
        user = self.users.get(user_id)
        if user is None:
            return None
        updated = _merge(User, user, updates)
        self.users[user_id] = updated
        return updated

    # ============================================================
    # COMPANIES
    # ============================================================

    async def get_company(self, company_id: str) -> Optional[Company]:
        return self.companies.get(company_id)

    async def get_companies_by_employer(self, employer_id: str) -> List[Company]:
        return [c for c in self.companies.values() if c.employer_id == employer_id]

    async def create_company(self, data: dict) -> Company:
        company = Company(**data, id=self._new_id(), created_at=self._now())
        self.companies[company.id] = company
        logger.debug("Stored company %s", company.id)
        return company

    async def update_company(self, company_id: str, updates: dict) -> Optional[Company]:
        company = self.companies.get(company_id)
        if company is None:
            return None
        updated = _merge(Company, company, updates)
        self.companies[company_id] = updated
        return updated

    # ============================================================
    # JOBS
    # ============================================================

    def _with_company(self, job: Job) -> Optional[JobWithCompany]:
        company = self.companies.get(job.company_id)
        if company is None:
            return None
        return JobWithCompany(**job.model_dump(), company=company)

    def _join_and_sort(self, jobs) -> List[JobWithCompany]:
        joined = [j for j in (self._with_company(job) for job in jobs) if j is not None]
        return sorted(joined, key=lambda j: j.created_at, reverse=True)

    async def get_job(self, job_id: str) -> Optional[Job]:
        return self.jobs.get(job_id)

    async def get_job_with_company(self, job_id: str) -> Optional[JobWithCompany]:
        job = self.jobs.get(job_id)
        if job is None:
            return None
        return self._with_company(job)

    async def get_jobs(self, filters: Optional[JobFilters] = None) -> List[JobWithCompany]:
        """
        Search active jobs.

        Every non-empty filter narrows the result (logical AND):
        - search: case-insensitive substring of title or description
        - location: case-insensitive substring of location
        - job_type, experience_level: exact match
        - min_salary: job.min_salary present and >= filter
        - max_salary: job.max_salary present and <= filter
        - skills: any filter skill is a case-insensitive substring of any job skill

        A salary filter of 0 counts as not supplied.

        Returns:
            Jobs joined to their company, newest first
        """
        jobs = [job for job in self.jobs.values() if job.is_active]
        f = filters or JobFilters()

        if f.search:
            needle = f.search.lower()
            jobs = [
                job for job in jobs
                if needle in job.title.lower() or needle in job.description.lower()
            ]

        if f.location:
            needle = f.location.lower()
            jobs = [job for job in jobs if needle in job.location.lower()]

        if f.job_type:
            jobs = [job for job in jobs if job.job_type == f.job_type]

        if f.experience_level:
            jobs = [job for job in jobs if job.experience_level == f.experience_level]

        if f.min_salary:
            jobs = [
                job for job in jobs
                if job.min_salary is not None and job.min_salary >= f.min_salary
            ]

        if f.max_salary:
            jobs = [
                job for job in jobs
                if job.max_salary is not None and job.max_salary <= f.max_salary
            ]

        if f.skills:
            wanted = [s.lower() for s in f.skills]
            jobs = [
                job for job in jobs
                if job.skills and any(
                    skill in job_skill.lower()
                    for skill in wanted
                    for job_skill in job.skills
                )
            ]

        return self._join_and_sort(jobs)

    async def get_jobs_by_employer(self, employer_id: str) -> List[JobWithCompany]:
        """All jobs posted by an employer, inactive ones included."""
        return self._join_and_sort(j for j in self.jobs.values() if j.employer_id == employer_id)

    async def create_job(self, data: dict) -> Job:
        job = Job(**data, id=self._new_id(), is_active=True, created_at=self._now())
        self.jobs[job.id] = job
        logger.debug("Stored job %s", job.id)
        return job

    async def update_job(self, job_id: str, updates: dict) -> Optional[Job]:
        job = self.jobs.get(job_id)
        if job is None:
            return None
        updated = _merge(Job, job, updates)
        self.jobs[job_id] = updated
        return updated

    async def delete_job(self, job_id: str) -> bool:
        return self.jobs.pop(job_id, None) is not None

    # ============================================================
    # APPLICATIONS
    # ============================================================

    def _with_job(self, applications) -> List[ApplicationWithJob]:
        rows = []
        for application in applications:
            job = self.jobs.get(application.job_id)
            job_with_company = self._with_company(job) if job is not None else None
            if job_with_company is not None:
                rows.append(ApplicationWithJob(**application.model_dump(), job=job_with_company))
        return sorted(rows, key=lambda a: a.applied_at, reverse=True)

    async def get_application(self, application_id: str) -> Optional[Application]:
        return self.applications.get(application_id)

    async def get_applications_by_applicant(self, applicant_id: str) -> List[ApplicationWithJob]:
        return self._with_job(
            a for a in self.applications.values() if a.applicant_id == applicant_id
        )

    async def get_applications_by_job(self, job_id: str) -> List[Application]:
        rows = [a for a in self.applications.values() if a.job_id == job_id]
        return sorted(rows, key=lambda a: a.applied_at, reverse=True)

    async def get_applications_by_employer(self, employer_id: str) -> List[ApplicationWithJob]:
        """Applications to any job the employer posted, newest first."""
        job_ids = {job.id for job in self.jobs.values() if job.employer_id == employer_id}
        return self._with_job(a for a in self.applications.values() if a.job_id in job_ids)

    async def get_application_by_job_and_applicant(
        self, job_id: str, applicant_id: str
    ) -> Optional[Application]:
        return next(
            (
                a for a in self.applications.values()
                if a.job_id == job_id and a.applicant_id == applicant_id
            ),
            None,
        )

    async def create_application(self, data: dict) -> Application:
        application = Application(
            **data,
            id=self._new_id(),
            status=ApplicationStatus.pending,
            applied_at=self._now(),
        )
        self.applications[application.id] = application
        logger.debug("Stored application %s", application.id)
        return application

    async def update_application(self, application_id: str, updates: dict) -> Optional[Application]:
        application = self.applications.get(application_id)
        if application is None:
            return None
        updated = _merge(Application, application, updates)
        self.applications[application_id] = updated
        return updated

    def counts(self) -> Dict[str, int]:
        """Row counts per entity (used by the health endpoint)."""
        return {
            "users": len(self.users),
            "companies": len(self.companies),
            "jobs": len(self.jobs),
            "applications": len(self.applications),
        }


def get_storage(request: Request) -> MemoryStorage:
    """
    Dependency for FastAPI route injection.
    Usage:
        @router.get("/jobs")
        async def list_jobs(storage: MemoryStorage = Depends(get_storage)):
            ...
    """
    return request.app.state.storage
