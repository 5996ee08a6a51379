"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobboard.api.routes.auth_routes import router as auth_router
from jobboard.api.routes.job_routes import router as job_router
from jobboard.api.routes.employer_routes import router as employer_router
from jobboard.api.routes.application_routes import router as application_router
from jobboard.api.routes.company_routes import router as company_router
from jobboard.api.routes.profile_routes import router as profile_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(job_router)
api_router.include_router(employer_router)
api_router.include_router(application_router)
api_router.include_router(company_router)
api_router.include_router(profile_router)
