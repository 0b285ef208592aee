# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: contacts.py
# -----------------------------------------------------------------------------
import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_contact_service, get_current_user_id, get_pagination
from api.schemas.common import Page
from api.schemas.contacts import (
    ContactCreateRequest,
    ContactDetail,
    ContactInfo,
    ContactListItem,
    ContactUpdateRequest,
)
from services.CRMContactService import CRMContactService
from utility.pagination import PaginationParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=Page[ContactListItem])
def list_contacts(
    company_id: Optional[str] = None,
    sort_by: Optional[Literal["name", "created_at", "last_interaction_at"]] = None,
    sort_order: Literal["asc", "desc"] = "asc",
    query: Optional[str] = None,
    pagination: PaginationParams = Depends(get_pagination),
    user_id: str = Depends(get_current_user_id),
    svc: CRMContactService = Depends(get_contact_service),
):
    return svc.list(
        user_id,
        pagination,
        company_id=company_id,
        sort_by=sort_by,
        sort_order=sort_order,
        query=query,
    )


@router.get("/{contact_id}", response_model=ContactDetail)
def get_contact(
    contact_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMContactService = Depends(get_contact_service),
):
    contact = svc.get(user_id, contact_id)
    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact


@router.post("", response_model=ContactInfo, status_code=201)
def create_contact(
    req: ContactCreateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CRMContactService = Depends(get_contact_service),
):
    logger.info("POST /contacts (company_id=%s)", req.company_id)
    return svc.create(user_id, req.model_dump())


@router.put("/{contact_id}", response_model=ContactInfo)
def update_contact(
    contact_id: str,
    req: ContactUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CRMContactService = Depends(get_contact_service),
):
    contact = svc.update(user_id, contact_id, req.model_dump(exclude_unset=True))
    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact


@router.delete("/{contact_id}", response_model=ContactInfo)
def delete_contact(
    contact_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMContactService = Depends(get_contact_service),
):
    contact = svc.delete(user_id, contact_id)
    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact
