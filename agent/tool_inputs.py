# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-11
# Description: tool_inputs.py (pydantic argument models for assistant tools)
# -----------------------------------------------------------------------------
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

InteractionType = Literal["call", "email", "meeting", "other"]
Sentiment = Literal["positive", "neutral", "negative"]
NotificationType = Literal["follow_up_email", "follow_up_call", "follow_up_meeting", "general"]


class ToolInput(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class NoInput(ToolInput):
    pass


class SearchInput(ToolInput):
    query: str = Field(min_length=1, description="Natural language search query")


class ListContactsInput(ToolInput):
    company_id: Optional[str] = Field(None, description="Filter by company ID")


class CreateContactInput(ToolInput):
    first_name: str = Field(min_length=1)
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
    company_id: Optional[str] = None
    company_name: Optional[str] = Field(
        None, description="Used when company_id is not given: matches an existing company or creates one"
    )


class ContactUpdates(ToolInput):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
    company_id: Optional[str] = None


class UpdateContactInput(ToolInput):
    contact_id: str
    updates: ContactUpdates


class ContactIdInput(ToolInput):
    contact_id: str


class CompanyIdInput(ToolInput):
    company_id: str


class CreateCompanyInput(ToolInput):
    name: str = Field(min_length=1)
    website: Optional[str] = None
    industry: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None


class CompanyUpdates(ToolInput):
    name: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None


class UpdateCompanyInput(ToolInput):
    company_id: str
    updates: CompanyUpdates


class AddInteractionInput(ToolInput):
    contact_id: str
    type: InteractionType
    summary: Optional[str] = None
    outcome: Optional[str] = None
    sentiment: Optional[Sentiment] = None
    occurred_at: Optional[str] = Field(None, description='When it happened, e.g. "yesterday", "last Tuesday"')


class InteractionUpdates(ToolInput):
    type: Optional[InteractionType] = None
    summary: Optional[str] = None
    outcome: Optional[str] = None
    sentiment: Optional[Sentiment] = None
    occurred_at: Optional[str] = None


class UpdateInteractionInput(ToolInput):
    interaction_id: str
    updates: InteractionUpdates


class GetInteractionsInput(ToolInput):
    contact_id: str
    limit: int = Field(20, ge=1, le=100)


class AddNoteInput(ToolInput):
    content: str = Field(min_length=1)
    contact_id: Optional[str] = None
    company_id: Optional[str] = None
    interaction_id: Optional[str] = None


class CreateNotificationInput(ToolInput):
    title: str = Field(min_length=1)
    type: NotificationType
    contact_id: Optional[str] = None
    interaction_id: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = Field(None, description='When to follow up, e.g. "tomorrow", "next week"')


class GetNotificationsInput(ToolInput):
    include_completed: bool = False
    contact_id: Optional[str] = None


class NotificationIdInput(ToolInput):
    notification_id: str
