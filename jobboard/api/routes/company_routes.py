"""
Company Routes

POST /companies - Create a company owned by the current employer
GET /my-companies - Companies owned by the current employer
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from jobboard.core.auth import get_current_employer
from jobboard.db import MemoryStorage, get_storage
from jobboard.models import Company
from jobboard.schemas import CompanyCreate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Companies"])


@router.post("/companies", response_model=Company, status_code=201)
async def create_company(
    data: CompanyCreate,
    employer: dict = Depends(get_current_employer),
    storage: MemoryStorage = Depends(get_storage),
):
    """Create a company. Only employer accounts can own companies."""
    fields = data.model_dump()
    fields["employer_id"] = employer["user_id"]
    company = await storage.create_company(fields)

    logger.info("Employer %s created company %s", employer["user_id"], company.id)
    return company


@router.get("/my-companies", response_model=List[Company])
async def get_my_companies(
    employer: dict = Depends(get_current_employer),
    storage: MemoryStorage = Depends(get_storage),
):
    """Get companies owned by the current employer."""
    return await storage.get_companies_by_employer(employer["user_id"])
