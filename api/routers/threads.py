# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: threads.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_current_user_id, get_pagination, get_thread_service
from api.schemas.common import Page
from api.schemas.threads import ThreadCreateRequest, ThreadDetail, ThreadInfo
from services.CRMThreadService import CRMThreadService
from utility.pagination import PaginationParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/threads", tags=["threads"])


@router.get("", response_model=Page[ThreadInfo])
def list_threads(
    pagination: PaginationParams = Depends(get_pagination),
    user_id: str = Depends(get_current_user_id),
    svc: CRMThreadService = Depends(get_thread_service),
):
    return svc.list_recent(user_id, pagination)


@router.post("", response_model=ThreadInfo, status_code=201)
def create_thread(
    req: ThreadCreateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CRMThreadService = Depends(get_thread_service),
):
    return svc.create(user_id, first_message=req.first_message, name=req.name)


@router.get("/{thread_id}", response_model=ThreadDetail)
def get_thread(
    thread_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMThreadService = Depends(get_thread_service),
):
    thread = svc.get(user_id, thread_id)
    if thread is None:
        raise HTTPException(status_code=404, detail="Thread not found")
    return thread


@router.delete("/{thread_id}", response_model=ThreadInfo)
def delete_thread(
    thread_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMThreadService = Depends(get_thread_service),
):
    thread = svc.delete(user_id, thread_id)
    if thread is None:
        raise HTTPException(status_code=404, detail="Thread not found")
    logger.info("Deleted thread %s", thread_id)
    return thread
