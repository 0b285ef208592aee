# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: notifications.py
# -----------------------------------------------------------------------------
import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_current_user_id, get_notification_service, get_pagination
from api.schemas.common import CountResponse, Page
from api.schemas.notifications import (
    NotificationCreateRequest,
    NotificationDetail,
    NotificationInfo,
    NotificationUpdateRequest,
)
from services.CRMNotificationService import CRMNotificationService
from utility.pagination import PaginationParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=Page[NotificationDetail])
def list_notifications(
    contact_id: Optional[str] = None,
    completed: Optional[bool] = None,
    pagination: PaginationParams = Depends(get_pagination),
    user_id: str = Depends(get_current_user_id),
    svc: CRMNotificationService = Depends(get_notification_service),
):
    return svc.list(user_id, pagination, contact_id=contact_id, completed=completed)


@router.get("/count", response_model=CountResponse)
def count_notifications(
    status: Optional[Literal["pending", "upcoming", "overdue"]] = None,
    days: int = Query(7, ge=1, le=365),
    user_id: str = Depends(get_current_user_id),
    svc: CRMNotificationService = Depends(get_notification_service),
) -> CountResponse:
    return CountResponse(count=svc.count(user_id, status=status, days=days))


@router.get("/pending", response_model=Page[NotificationDetail])
def pending_notifications(
    pagination: PaginationParams = Depends(get_pagination),
    user_id: str = Depends(get_current_user_id),
    svc: CRMNotificationService = Depends(get_notification_service),
):
    return svc.pending(user_id, pagination)


@router.get("/upcoming", response_model=Page[NotificationDetail])
def upcoming_notifications(
    days: int = Query(7, ge=1, le=365),
    pagination: PaginationParams = Depends(get_pagination),
    user_id: str = Depends(get_current_user_id),
    svc: CRMNotificationService = Depends(get_notification_service),
):
    return svc.upcoming(user_id, pagination, days=days)


@router.get("/overdue", response_model=Page[NotificationDetail])
def overdue_notifications(
    pagination: PaginationParams = Depends(get_pagination),
    user_id: str = Depends(get_current_user_id),
    svc: CRMNotificationService = Depends(get_notification_service),
):
    return svc.overdue(user_id, pagination)


@router.get("/{notification_id}", response_model=NotificationDetail)
def get_notification(
    notification_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMNotificationService = Depends(get_notification_service),
):
    notification = svc.get(user_id, notification_id)
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification


@router.post("", response_model=NotificationInfo, status_code=201)
def create_notification(
    req: NotificationCreateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CRMNotificationService = Depends(get_notification_service),
):
    logger.info("POST /notifications type=%s contact_id=%s", req.type, req.contact_id)
    return svc.create(user_id, req.model_dump())


@router.put("/{notification_id}/complete", response_model=NotificationInfo)
def complete_notification(
    notification_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMNotificationService = Depends(get_notification_service),
):
    notification = svc.complete(user_id, notification_id)
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification


@router.put("/{notification_id}/incomplete", response_model=NotificationInfo)
def incomplete_notification(
    notification_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMNotificationService = Depends(get_notification_service),
):
    notification = svc.incomplete(user_id, notification_id)
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification


@router.put("/{notification_id}", response_model=NotificationInfo)
def update_notification(
    notification_id: str,
    req: NotificationUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    svc: CRMNotificationService = Depends(get_notification_service),
):
    notification = svc.update(user_id, notification_id, req.model_dump(exclude_unset=True))
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification


@router.delete("/{notification_id}", response_model=NotificationInfo)
def delete_notification(
    notification_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CRMNotificationService = Depends(get_notification_service),
):
    notification = svc.delete(user_id, notification_id)
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification
