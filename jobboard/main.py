"""
Job Board - Main Application

FastAPI backend with:
- In-memory storage engine (volatile, one instance per app)
- JWT bearer authentication for employers and job seekers
- JSON error bodies of the form {"message": ...}

Run: uvicorn jobboard.main:app --reload
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException

from jobboard.api import api_router
from jobboard.core.config import Settings, get_settings
from jobboard.db import MemoryStorage
from jobboard.schemas import HealthResponse
from jobboard.utils.logger import setup_logger

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: Exception):
    # RequestValidationError for bad requests, ValidationError for a merged
    # record that no longer satisfies the entity model
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid input", "errors": jsonable_encoder(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Server error"})


def create_app(settings: Optional[Settings] = None, storage: Optional[MemoryStorage] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: defaults to get_settings() (environment / .env)
        storage: defaults to a fresh, empty MemoryStorage
    """
    settings = settings or get_settings()
    setup_logger("jobboard", settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Job board API starting (company ownership enforced: %s)",
                    settings.enforce_company_ownership)
        yield
        logger.info("Job board API stopped")

    app = FastAPI(
        title="Job Board",
        description="""
        Job board API.

        ## Features
        - **Authentication**: JWT-based auth for job seekers and employers
        - **Companies**: Employers create and list their companies
        - **Jobs**: Search, filter, post, update and deactivate jobs
        - **Applications**: Apply once per job, track and review status
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.storage = storage if storage is not None else MemoryStorage()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 1)
        logger.info(
            "%s %s -> %s (%sms)", request.method, request.url.path, response.status_code, duration_ms,
            extra={"method": request.method, "path": request.url.path,
                   "status": response.status_code, "duration_ms": duration_ms},
        )
        return response

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request):
        """Liveness check with row counts per entity."""
        return HealthResponse(status="healthy", counts=request.app.state.storage.counts())

    return app


app = create_app()
