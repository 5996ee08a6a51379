"""
Job Routes

POST /jobs - Create job posting (employer only)
GET /jobs - List active jobs with filters
GET /jobs/{job_id} - Get job details with company
PATCH /jobs/{job_id} - Update job, incl. isActive (owning employer)
DELETE /jobs/{job_id} - Delete job (owning employer)
GET /jobs/{job_id}/applications - Applications for one job (owning employer)
POST /jobs/{job_id}/apply - Apply to job (job seeker only)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Query

from jobboard.core.auth import get_current_employer, get_current_job_seeker, get_app_settings
from jobboard.core.config import Settings
from jobboard.db import MemoryStorage, get_storage
from jobboard.models import (
    Application, ExperienceLevel, Job, JobFilters, JobType, JobWithCompany,
)
from jobboard.schemas import ApplicationCreate, JobCreate, JobUpdate, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


async def _check_company_owner(company_id: str, employer: dict, storage: MemoryStorage) -> None:
    company = await storage.get_company(company_id)
    if not company or company.employer_id != employer["user_id"]:
        raise HTTPException(status_code=403, detail="Company not owned by this employer")


async def _get_owned_job(job_id: str, employer: dict, storage: MemoryStorage) -> Job:
    job = await storage.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if job.employer_id != employer["user_id"]:
        raise HTTPException(status_code=403, detail="Access denied")
    return job


def _split_skills(skills: Optional[str]) -> Optional[List[str]]:
    """'react, python,' -> ['react', 'python']"""
    if not skills:
        return None
    parts = [s.strip() for s in skills.split(",")]
    return [s for s in parts if s] or None


@router.post("", response_model=Job, status_code=201)
async def create_job(
    job: JobCreate,
    employer: dict = Depends(get_current_employer),
    storage: MemoryStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    """Create a new job posting. Only employers can create jobs."""
    if settings.enforce_company_ownership:
        await _check_company_owner(job.company_id, employer, storage)

    data = job.model_dump()
    data["employer_id"] = employer["user_id"]
    created = await storage.create_job(data)

    logger.info("Employer %s posted job %s", employer["user_id"], created.id)
    return created


@router.get("", response_model=List[JobWithCompany])
async def list_jobs(
    search: Optional[str] = Query(None, description="Search in title and description"),
    location: Optional[str] = Query(None),
    job_type: Optional[JobType] = Query(None, alias="jobType"),
    experience_level: Optional[ExperienceLevel] = Query(None, alias="experienceLevel"),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    max_salary: Optional[int] = Query(None, alias="maxSalary", ge=0),
    skills: Optional[str] = Query(None, description="Comma-separated skills"),
    storage: MemoryStorage = Depends(get_storage),
):
    """List active job postings, newest first."""
    filters = JobFilters(
        search=search,
        location=location,
        job_type=job_type,
        experience_level=experience_level,
        min_salary=min_salary,
        max_salary=max_salary,
        skills=_split_skills(skills),
    )
    return await storage.get_jobs(filters)


@router.get("/{job_id}", response_model=JobWithCompany)
async def get_job(job_id: str, storage: MemoryStorage = Depends(get_storage)):
    """Get details of a specific job."""
    job = await storage.get_job_with_company(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.patch("/{job_id}", response_model=Job)
async def update_job(
    job_id: str,
    update: JobUpdate,
    employer: dict = Depends(get_current_employer),
    storage: MemoryStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    """Update a job posting. Only the owning employer can update."""
    job = await _get_owned_job(job_id, employer, storage)
    updates = update.model_dump(exclude_unset=True)

    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    min_salary = updates.get("min_salary", job.min_salary)
    max_salary = updates.get("max_salary", job.max_salary)
    if min_salary is not None and max_salary is not None and min_salary > max_salary:
        raise HTTPException(status_code=400, detail="minSalary cannot exceed maxSalary")

    if settings.enforce_company_ownership and "company_id" in updates:
        await _check_company_owner(updates["company_id"], employer, storage)

    updated = await storage.update_job(job_id, updates)
    logger.info("Job %s updated (%s)", job_id, ", ".join(sorted(updates)))
    return updated


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: str,
    employer: dict = Depends(get_current_employer),
    storage: MemoryStorage = Depends(get_storage),
):
    """Delete a job posting. Prefer PATCH isActive=false to hide it instead."""
    await _get_owned_job(job_id, employer, storage)
    await storage.delete_job(job_id)

    logger.info("Job %s deleted by %s", job_id, employer["user_id"])
    return MessageResponse(message="Job deleted successfully")


@router.get("/{job_id}/applications", response_model=List[Application])
async def get_job_applications(
    job_id: str,
    employer: dict = Depends(get_current_employer),
    storage: MemoryStorage = Depends(get_storage),
):
    """All applications for one of the employer's jobs."""
    await _get_owned_job(job_id, employer, storage)
    return await storage.get_applications_by_job(job_id)


@router.post("/{job_id}/apply", response_model=Application, status_code=201)
async def apply_to_job(
    job_id: str,
    application: Optional[ApplicationCreate] = None,
    seeker: dict = Depends(get_current_job_seeker),
    storage: MemoryStorage = Depends(get_storage),
):
    """Apply to a job. Job seekers only. Cannot apply twice to same job."""
    job = await storage.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if not job.is_active:
        raise HTTPException(status_code=400, detail="Job is not accepting applications")

    if await storage.get_application_by_job_and_applicant(job_id, seeker["user_id"]):
        raise HTTPException(status_code=409, detail="Already applied to this job")

    created = await storage.create_application({
        "job_id": job_id,
        "applicant_id": seeker["user_id"],
        "cover_letter": application.cover_letter if application else None,
    })

    logger.info("User %s applied to job %s", seeker["user_id"], job_id)
    return created
