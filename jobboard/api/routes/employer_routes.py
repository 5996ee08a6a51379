"""
Employer Routes

GET /employer/jobs - Jobs posted by the current employer (inactive included)
GET /employer/applications - Applications received across all own jobs
"""

from typing import List

from fastapi import APIRouter, Depends

from jobboard.core.auth import get_current_employer
from jobboard.db import MemoryStorage, get_storage
from jobboard.models import ApplicationWithJob, JobWithCompany

router = APIRouter(prefix="/employer", tags=["Employer"])


@router.get("/jobs", response_model=List[JobWithCompany])
async def get_employer_jobs(
    employer: dict = Depends(get_current_employer),
    storage: MemoryStorage = Depends(get_storage),
):
    """Get all jobs posted by this employer, newest first."""
    return await storage.get_jobs_by_employer(employer["user_id"])


@router.get("/applications", response_model=List[ApplicationWithJob])
async def get_employer_applications(
    employer: dict = Depends(get_current_employer),
    storage: MemoryStorage = Depends(get_storage),
):
    """Get all applications for this employer's job postings."""
    return await storage.get_applications_by_employer(employer["user_id"])
