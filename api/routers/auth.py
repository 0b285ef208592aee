# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: auth.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_current_user_id, get_user_service
from api.schemas.auth import UserProfile, UserProfileUpdate
from services.CRMUserService import CRMUserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=UserProfile)
def get_me(
    user_id: str = Depends(get_current_user_id),
    svc: CRMUserService = Depends(get_user_service),
) -> UserProfile:
    user = svc.get(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserProfile(**user)


@router.put("/me", response_model=UserProfile)
def update_me(
    req: UserProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    svc: CRMUserService = Depends(get_user_service),
) -> UserProfile:
    user = svc.update(user_id, req.model_dump(exclude_unset=True))
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("Updated profile for user %s", user_id)
    return UserProfile(**user)
