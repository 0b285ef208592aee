# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-04
# Description: serializers.py (ORM rows -> JSON-ready dicts)
# -----------------------------------------------------------------------------
from datetime import datetime
from typing import Any, Dict, Optional

from persistence.models import Company, Contact, Interaction, Message, Note, Notification, Thread, User


def iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt is not None else None


def user_to_dict(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "image_url": user.image_url,
        "created_at": iso(user.created_at),
        "updated_at": iso(user.updated_at),
    }


def company_to_dict(company: Company) -> Dict[str, Any]:
    return {
        "id": company.id,
        "name": company.name,
        "website": company.website,
        "industry": company.industry,
        "address": company.address,
        "description": company.description,
        "created_at": iso(company.created_at),
        "updated_at": iso(company.updated_at),
    }


def contact_to_dict(contact: Contact, include_company: bool = True) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": contact.id,
        "first_name": contact.first_name,
        "last_name": contact.last_name,
        "email": contact.email,
        "phone": contact.phone,
        "job_title": contact.job_title,
        "company_id": contact.company_id,
        "created_at": iso(contact.created_at),
        "updated_at": iso(contact.updated_at),
    }
    if include_company:
        out["company"] = company_to_dict(contact.company) if contact.company is not None else None
    return out


def interaction_to_dict(interaction: Interaction, include_contact: bool = False) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": interaction.id,
        "contact_id": interaction.contact_id,
        "type": interaction.type,
        "summary": interaction.summary,
        "outcome": interaction.outcome,
        "sentiment": interaction.sentiment,
        "occurred_at": iso(interaction.occurred_at),
        "created_at": iso(interaction.created_at),
    }
    if include_contact and interaction.contact is not None:
        out["contact"] = contact_to_dict(interaction.contact, include_company=False)
    return out


def note_to_dict(note: Note) -> Dict[str, Any]:
    return {
        "id": note.id,
        "content": note.content,
        "contact_id": note.contact_id,
        "company_id": note.company_id,
        "interaction_id": note.interaction_id,
        "created_at": iso(note.created_at),
        "updated_at": iso(note.updated_at),
    }


def notification_to_dict(notification: Notification, include_contact: bool = False) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": notification.id,
        "contact_id": notification.contact_id,
        "interaction_id": notification.interaction_id,
        "type": notification.type,
        "title": notification.title,
        "description": notification.description,
        "due_date": iso(notification.due_date),
        "is_completed": bool(notification.is_completed),
        "completed_at": iso(notification.completed_at),
        "created_at": iso(notification.created_at),
    }
    if include_contact:
        contact = notification.contact
        out["contact"] = contact_to_dict(contact, include_company=False) if contact is not None else None
    return out


def thread_to_dict(thread: Thread) -> Dict[str, Any]:
    return {
        "id": thread.id,
        "name": thread.name,
        "created_at": iso(thread.created_at),
        "updated_at": iso(thread.updated_at),
    }


def message_to_dict(message: Message) -> Dict[str, Any]:
    return {
        "id": message.id,
        "thread_id": message.thread_id,
        "role": message.role,
        "content": message.content,
        "tool_calls": message.tool_calls,
        "tool_results": message.tool_results,
        "created_at": iso(message.created_at),
    }
