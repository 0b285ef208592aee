# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-07
# Description: CRMNoteService
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict, Optional, Set

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from persistence.Database import Database
from persistence.models import Company, Contact, Interaction, Note, utcnow
from persistence.serializers import company_to_dict, contact_to_dict, interaction_to_dict, note_to_dict
from services.common import apply_updates, count_rows, get_owned, require_owned
from utility.logging_utils import get_class_logger
from utility.pagination import PaginationParams, paginated_response

NOTE_FIELDS = ("content", "contact_id", "company_id", "interaction_id")

_PARENTS = (
    ("contact_id", Contact, "Contact"),
    ("company_id", Company, "Company"),
    ("interaction_id", Interaction, "Interaction"),
)


class CRMNoteService:
    """
    User-scoped notes. Note bodies are part of the owning contact's
    searchable text, so any write touching a contact reindexes it.
    """

    def __init__(self, *, db: Database, search: Any = None, logger: logging.Logger | None = None):
        self.db = db
        self.search = search
        self.logger = logger or get_class_logger(self.__class__)

    def create(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        with self.db.session() as session:
            self._check_parents(session, user_id, data)
            note = Note(user_id=user_id, **{k: data.get(k) for k in NOTE_FIELDS})
            session.add(note)
            session.flush()
            out = note_to_dict(note)

        self.logger.info("Created note %s", out["id"])
        self._reindex(user_id, {out["contact_id"]})
        return out

    def get(self, user_id: str, note_id: str) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            note = get_owned(
                session, Note, user_id, note_id,
                selectinload(Note.contact), selectinload(Note.company), selectinload(Note.interaction),
            )
            return self._with_parents(note) if note is not None else None

    def list(
            self,
            user_id: str,
            pagination: PaginationParams,
            contact_id: Optional[str] = None,
            company_id: Optional[str] = None,
            interaction_id: Optional[str] = None,
            query: Optional[str] = None,
    ) -> Dict[str, Any]:
        conditions = [Note.user_id == user_id]
        if contact_id:
            conditions.append(Note.contact_id == contact_id)
        if company_id:
            conditions.append(Note.company_id == company_id)
        if interaction_id:
            conditions.append(Note.interaction_id == interaction_id)
        if query and query.strip():
            # Every whitespace-separated term must appear somewhere in the body
            for term in query.split():
                conditions.append(Note.content.ilike(f"%{term}%"))

        with self.db.session() as session:
            total = count_rows(session, Note, *conditions)
            rows = session.scalars(
                select(Note)
                .where(*conditions)
                .options(selectinload(Note.contact), selectinload(Note.company), selectinload(Note.interaction))
                .order_by(Note.created_at.desc(), Note.id)
                .offset(pagination.offset)
                .limit(pagination.limit)
            ).all()
            data = [self._with_parents(n) for n in rows]

        return paginated_response(data, total, pagination)

    def list_by(self, user_id: str, field: str, value: str, pagination: PaginationParams) -> Dict[str, Any]:
        """Notes attached to one parent; ``field`` is contact_id, company_id or interaction_id."""
        if field not in ("contact_id", "company_id", "interaction_id"):
            raise ValueError(f"Unsupported note parent: {field}")

        conditions = [Note.user_id == user_id, getattr(Note, field) == value]
        with self.db.session() as session:
            total = count_rows(session, Note, *conditions)
            rows = session.scalars(
                select(Note)
                .where(*conditions)
                .order_by(Note.created_at.desc(), Note.id)
                .offset(pagination.offset)
                .limit(pagination.limit)
            ).all()
            data = [note_to_dict(n) for n in rows]

        return paginated_response(data, total, pagination)

    def update(self, user_id: str, note_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            note = get_owned(session, Note, user_id, note_id)
            if note is None:
                return None
            self._check_parents(session, user_id, data)

            touched = {note.contact_id}
            apply_updates(note, data, NOTE_FIELDS)
            note.updated_at = utcnow()
            session.flush()
            touched.add(note.contact_id)
            out = note_to_dict(note)

        self._reindex(user_id, touched)
        return out

    def delete(self, user_id: str, note_id: str) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            note = get_owned(session, Note, user_id, note_id)
            if note is None:
                return None
            out = note_to_dict(note)
            session.delete(note)

        self._reindex(user_id, {out["contact_id"]})
        return out

    @staticmethod
    def _check_parents(session, user_id: str, data: Dict[str, Any]) -> None:
        for key, model, label in _PARENTS:
            if data.get(key):
                require_owned(session, model, user_id, data[key], label)

    @staticmethod
    def _with_parents(note: Note) -> Dict[str, Any]:
        out = note_to_dict(note)
        out["contact"] = contact_to_dict(note.contact, include_company=False) if note.contact else None
        out["company"] = company_to_dict(note.company) if note.company else None
        out["interaction"] = interaction_to_dict(note.interaction) if note.interaction else None
        return out

    def _reindex(self, user_id: str, contact_ids: Set[Optional[str]]) -> None:
        if self.search is None:
            return
        for contact_id in contact_ids:
            if contact_id:
                self.search.index_contact(user_id, contact_id)
