"""
Application Routes

GET /my-applications - Applications submitted by the current job seeker
PATCH /applications/{application_id} - Update status / cover letter
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Depends

from jobboard.core.auth import get_current_user, get_current_job_seeker
from jobboard.db import MemoryStorage, get_storage
from jobboard.models import Application, ApplicationWithJob
from jobboard.schemas import ApplicationUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Applications"])


@router.get("/my-applications", response_model=List[ApplicationWithJob])
async def get_my_applications(
    seeker: dict = Depends(get_current_job_seeker),
    storage: MemoryStorage = Depends(get_storage),
):
    """Get all job applications for current job seeker."""
    return await storage.get_applications_by_applicant(seeker["user_id"])


@router.patch("/applications/{application_id}", response_model=Application)
async def update_application(
    application_id: str,
    update: ApplicationUpdate,
    user: dict = Depends(get_current_user),
    storage: MemoryStorage = Depends(get_storage),
):
    """
    Update an application.

    Allowed for the employer who owns the job and for the applicant.
    """
    application = await storage.get_application(application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")

    # Verify ownership; an application whose job is gone is frozen
    job = await storage.get_job(application.job_id)
    if not job or (
        job.employer_id != user["user_id"] and application.applicant_id != user["user_id"]
    ):
        raise HTTPException(status_code=403, detail="Access denied")

    updates = update.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    updated = await storage.update_application(application_id, updates)
    if "status" in updates:
        logger.info("Application %s status -> %s", application_id, updated.status.value)
    return updated
