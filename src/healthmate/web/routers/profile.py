"""User profile routes."""

from fastapi import APIRouter, Body, Depends

from ...db import UserProfileRepository
from ...errors import NotFoundError
from ...services.validation import parse_profile
from .deps import get_profile_repo, get_user_id

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("")
async def get_profile(
    user_id: int = Depends(get_user_id),
    repo: UserProfileRepository = Depends(get_profile_repo),
):
    profile = await repo.get(user_id)
    if profile is None:
        raise NotFoundError(f"Profile {user_id} not found")
    return {"id": profile.id, **profile.to_dict()}


@router.post("", status_code=201)
async def create_profile(
    payload: dict = Body(...),
    repo: UserProfileRepository = Depends(get_profile_repo),
):
    """Create a profile. Its ID is the user ID for every other route."""
    profile = parse_profile(payload)
    profile.id = await repo.create(profile)
    return {"id": profile.id, **profile.to_dict()}


@router.put("")
async def update_profile(
    payload: dict = Body(...),
    user_id: int = Depends(get_user_id),
    repo: UserProfileRepository = Depends(get_profile_repo),
):
    """Replace the caller's profile."""
    if await repo.get(user_id) is None:
        raise NotFoundError(f"Profile {user_id} not found")
    profile = parse_profile(payload)
    profile.id = user_id
    await repo.update(profile)
    return {"id": profile.id, **profile.to_dict()}
