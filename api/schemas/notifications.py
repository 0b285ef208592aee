# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: notifications.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

from api.schemas.common import UTCDateTime

NotificationType = Literal["follow_up_email", "follow_up_call", "follow_up_meeting", "general"]

class NotificationCreateRequest(BaseModel):
    type: NotificationType = "general"
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    contact_id: Optional[str] = None
    interaction_id: Optional[str] = None
    due_date: Optional[UTCDateTime] = None

class NotificationUpdateRequest(BaseModel):
    type: Optional[NotificationType] = None
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    contact_id: Optional[str] = None
    interaction_id: Optional[str] = None
    due_date: Optional[UTCDateTime] = None

class NotificationInfo(BaseModel):
    id: str
    type: str
    title: str
    description: Optional[str] = None
    contact_id: Optional[str] = None
    interaction_id: Optional[str] = None
    due_date: Optional[str] = None
    is_completed: bool
    completed_at: Optional[str] = None
    created_at: Optional[str] = None

class NotificationDetail(NotificationInfo):
    contact: Optional[Dict[str, Any]] = None
    interaction: Optional[Dict[str, Any]] = None
