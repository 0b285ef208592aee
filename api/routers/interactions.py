# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: interactions.py
# -----------------------------------------------------------------------------
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_current_user_id, get_interaction_service, get_pagination
from api.schemas.common import Page
from api.schemas.interactions import (
    InteractionCreateRequest,
    InteractionDetail,
    InteractionInfo,
    InteractionListItem,
    InteractionUpdateRequest,
)
from services.CRMInteractionService import CRMInteractionService
from utility.pagination import PaginationParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interactions", tags=["interactions"])


@router.get("", response_model=Page[InteractionListItem])
def list_interactions(
    contact_id: Optional[str] = None,
    pagination: PaginationParams = Depends(get_pagination),
    user_id: str = Depends(get_current_user_id),
    svc: CRMInteractionService = Depends(get_interaction_service),
):
    return svc.list(user_id, pagination, contact_id=contact_id)


@router.get("/contact/{contact_id}", response_model=Page[InteractionListItem])
def list_contact_interactions(
    contact_id: str,
    pagination: PaginationParams = Depends(get_pagination),
    user_id: str = Depends(get_current_user_id),
    svc: CRMInteractionService = Depends(get_interaction_service),
):
    return svc.list_by_contact(user_id, contact_id, pagination)


@router.get("/{interaction_id}", response_model=InteractionDetail)
def get_interaction(
    interaction_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMInteractionService = Depends(get_interaction_service),
):
    interaction = svc.get(user_id, interaction_id)
    if interaction is None:
        raise HTTPException(status_code=404, detail="Interaction not found")
    return interaction


@router.post("", response_model=InteractionInfo, status_code=201)
def create_interaction(
    req: InteractionCreateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CRMInteractionService = Depends(get_interaction_service),
):
    logger.info("POST /interactions type=%s contact_id=%s", req.type, req.contact_id)
    return svc.create(user_id, req.model_dump())


@router.put("/{interaction_id}", response_model=InteractionInfo)
def update_interaction(
    interaction_id: str,
    req: InteractionUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CRMInteractionService = Depends(get_interaction_service),
):
    interaction = svc.update(user_id, interaction_id, req.model_dump(exclude_unset=True))
    if interaction is None:
        raise HTTPException(status_code=404, detail="Interaction not found")
    return interaction


@router.delete("/{interaction_id}", response_model=InteractionInfo)
def delete_interaction(
    interaction_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMInteractionService = Depends(get_interaction_service),
):
    interaction = svc.delete(user_id, interaction_id)
    if interaction is None:
        raise HTTPException(status_code=404, detail="Interaction not found")
    return interaction
