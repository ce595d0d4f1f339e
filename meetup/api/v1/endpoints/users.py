"""User profile endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from meetup.api.deps import get_db, get_current_user_id
from meetup.schemas import ProfileResponse, ProfileUpdate
from meetup.services.user import get_profile, upsert_profile
from meetup.core.rate_limit import limiter, RATE_LIMITS

router = APIRouter()


@router.get("/me", response_model=ProfileResponse)
@limiter.limit(RATE_LIMITS["read"])
async def get_my_profile_endpoint(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Get the caller's public profile."""
    profile = get_profile(db, user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.put("/me", response_model=ProfileResponse)
@limiter.limit(RATE_LIMITS["meeting_write"])
async def update_my_profile_endpoint(
    request: Request,
    profile: ProfileUpdate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Create or update the caller's nickname and bio shown to hosts."""
    return upsert_profile(db, user_id, profile.nickname, profile.bio)
