# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-09-13
# Description: dependencies.py
# -----------------------------------------------------------------------------
from typing import Optional

from fastapi import Depends, Header, HTTPException, Query, Request

import settings
from api.AppContainer import AppContainer
from services.CRMAssistantService import CRMAssistantService
from services.CRMCompanyService import CRMCompanyService
from services.CRMContactService import CRMContactService
from services.CRMHealthService import CRMHealthService
from services.CRMInteractionService import CRMInteractionService
from services.CRMNoteService import CRMNoteService
from services.CRMNotificationService import CRMNotificationService
from services.CRMSearchService import CRMSearchService
from services.CRMStatsService import CRMStatsService
from services.CRMThreadService import CRMThreadService
from services.CRMUserService import CRMUserService
from utility.pagination import PaginationParams, parse_pagination_params


def get_container(request: Request) -> AppContainer:
    # built once in the app lifespan
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(status_code=503, detail="Application is starting up")
    return container


def get_user_service(c: AppContainer = Depends(get_container)) -> CRMUserService:
    return c.user_service


def get_company_service(c: AppContainer = Depends(get_container)) -> CRMCompanyService:
    return c.company_service


def get_contact_service(c: AppContainer = Depends(get_container)) -> CRMContactService:
    return c.contact_service


def get_interaction_service(c: AppContainer = Depends(get_container)) -> CRMInteractionService:
    return c.interaction_service


def get_note_service(c: AppContainer = Depends(get_container)) -> CRMNoteService:
    return c.note_service


def get_notification_service(c: AppContainer = Depends(get_container)) -> CRMNotificationService:
    return c.notification_service


def get_search_service(c: AppContainer = Depends(get_container)) -> CRMSearchService:
    return c.search_service


def get_stats_service(c: AppContainer = Depends(get_container)) -> CRMStatsService:
    return c.stats_service


def get_thread_service(c: AppContainer = Depends(get_container)) -> CRMThreadService:
    return c.thread_service


def get_assistant_service(c: AppContainer = Depends(get_container)) -> CRMAssistantService:
    return c.assistant_service


def get_health_service(c: AppContainer = Depends(get_container)) -> CRMHealthService:
    return c.health_service


def get_current_user_id(
        x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
        users: CRMUserService = Depends(get_user_service),
) -> str:
    """
    The identity gateway in front of the API authenticates the caller and
    forwards its user id. First sight of an id registers the user.
    """
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    users.get_or_create(user_id)
    return user_id


def get_pagination(
        offset: Optional[int] = Query(None, description="Rows to skip"),
        limit: Optional[int] = Query(None, description=f"Page size (max {settings.PAGINATION_MAX_LIMIT})"),
) -> PaginationParams:
    return parse_pagination_params(offset, limit)
