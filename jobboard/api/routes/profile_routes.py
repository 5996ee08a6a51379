"""
Profile Routes

PATCH /profile - Update own profile (names, resume URL, profile data)
"""

from fastapi import APIRouter, HTTPException, Depends

from jobboard.core.auth import get_current_user
from jobboard.db import MemoryStorage, get_storage
from jobboard.schemas import ProfileUpdate, UserResponse

router = APIRouter(tags=["Profile"])


@router.patch("/profile", response_model=UserResponse)
async def update_profile(
    data: ProfileUpdate,
    user: dict = Depends(get_current_user),
    storage: MemoryStorage = Depends(get_storage),
):
    """Update profile. Only provided fields are updated; email, password and role are read-only."""
    updates = data.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    record = await storage.update_user(user["user_id"], updates)
    if not record:
        raise HTTPException(status_code=404, detail="User not found")

    return UserResponse.from_user(record)
