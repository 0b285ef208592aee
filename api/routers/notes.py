# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: notes.py
# -----------------------------------------------------------------------------
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_current_user_id, get_note_service, get_pagination
from api.schemas.common import Page
from api.schemas.notes import NoteCreateRequest, NoteDetail, NoteInfo, NoteUpdateRequest
from services.CRMNoteService import CRMNoteService
from utility.pagination import PaginationParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=Page[NoteDetail])
def list_notes(
    contact_id: Optional[str] = None,
    company_id: Optional[str] = None,
    interaction_id: Optional[str] = None,
    query: Optional[str] = None,
    pagination: PaginationParams = Depends(get_pagination),
    user_id: str = Depends(get_current_user_id),
    svc: CRMNoteService = Depends(get_note_service),
):
    return svc.list(
        user_id,
        pagination,
        contact_id=contact_id,
        company_id=company_id,
        interaction_id=interaction_id,
        query=query,
    )


@router.get("/contact/{contact_id}", response_model=Page[NoteInfo])
def list_contact_notes(
    contact_id: str,
    pagination: PaginationParams = Depends(get_pagination),
    user_id: str = Depends(get_current_user_id),
    svc: CRMNoteService = Depends(get_note_service),
):
    return svc.list_by(user_id, "contact_id", contact_id, pagination)


@router.get("/company/{company_id}", response_model=Page[NoteInfo])
def list_company_notes(
    company_id: str,
    pagination: PaginationParams = Depends(get_pagination),
    user_id: str = Depends(get_current_user_id),
    svc: CRMNoteService = Depends(get_note_service),
):
    return svc.list_by(user_id, "company_id", company_id, pagination)


@router.get("/interaction/{interaction_id}", response_model=Page[NoteInfo])
def list_interaction_notes(
    interaction_id: str,
    pagination: PaginationParams = Depends(get_pagination),
    user_id: str = Depends(get_current_user_id),
    svc: CRMNoteService = Depends(get_note_service),
):
    return svc.list_by(user_id, "interaction_id", interaction_id, pagination)


@router.get("/{note_id}", response_model=NoteDetail)
def get_note(
    note_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMNoteService = Depends(get_note_service),
):
    note = svc.get(user_id, note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.post("", response_model=NoteInfo, status_code=201)
def create_note(
    req: NoteCreateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CRMNoteService = Depends(get_note_service),
):
    logger.info("POST /notes contact_id=%s company_id=%s", req.contact_id, req.company_id)
    return svc.create(user_id, req.model_dump())


@router.put("/{note_id}", response_model=NoteInfo)
def update_note(
    note_id: str,
    req: NoteUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CRMNoteService = Depends(get_note_service),
):
    note = svc.update(user_id, note_id, req.model_dump(exclude_unset=True))
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.delete("/{note_id}", response_model=NoteInfo)
def delete_note(
    note_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMNoteService = Depends(get_note_service),
):
    note = svc.delete(user_id, note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return note
