# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-06
# Description: CRMContactService
# -----------------------------------------------------------------------------
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import selectinload

from persistence.Database import Database
from persistence.models import Company, Contact, Interaction, utcnow
from persistence.serializers import (
    contact_to_dict,
    interaction_to_dict,
    iso,
    note_to_dict,
    notification_to_dict,
)
from services.common import apply_updates, count_rows, get_owned, require_owned
from utility.logging_utils import get_class_logger
from utility.pagination import PaginationParams, paginated_response

CONTACT_FIELDS = ("first_name", "last_name", "email", "phone", "job_title", "company_id")
CONTACT_SORT_FIELDS = ("name", "created_at", "last_interaction_at")

RECENT_INTERACTIONS = 10

# Stand-in for "never interacted" when sorting by last interaction
_EPOCH = datetime(1970, 1, 1)


class CRMContactService:
    """
    User-scoped contact CRUD.

    Every create/update ends with a best-effort reindex through
    CRMSearchService.index_contact: the write commits first and an embedding
    failure only costs semantic discoverability until the next reindex.
    """

    def __init__(self, *, db: Database, search: Any = None, logger: logging.Logger | None = None):
        self.db = db
        self.search = search
        self.logger = logger or get_class_logger(self.__class__)

    def create(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        with self.db.session() as session:
            if data.get("company_id"):
                require_owned(session, Company, user_id, data["company_id"], "Company")

            contact = Contact(user_id=user_id, **{k: data.get(k) for k in CONTACT_FIELDS})
            session.add(contact)
            session.flush()
            session.refresh(contact, attribute_names=["company"])
            out = contact_to_dict(contact)

        self.logger.info("Created contact %s", out["id"])
        self._reindex(user_id, out["id"])
        return out

    def get(self, user_id: str, contact_id: str) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            contact = get_owned(
                session, Contact, user_id, contact_id,
                selectinload(Contact.company),
                selectinload(Contact.notes),
                selectinload(Contact.notifications),
            )
            if contact is None:
                return None

            recent = session.scalars(
                select(Interaction)
                .where(Interaction.contact_id == contact_id, Interaction.user_id == user_id)
                .order_by(Interaction.occurred_at.desc())
                .limit(RECENT_INTERACTIONS)
            ).all()

            out = contact_to_dict(contact)
            out["interactions"] = [interaction_to_dict(i) for i in recent]
            out["notes"] = [note_to_dict(n) for n in sorted(contact.notes, key=lambda n: n.created_at, reverse=True)]
            out["notifications"] = [notification_to_dict(n) for n in contact.notifications]
            return out

    def list(
            self,
            user_id: str,
            pagination: PaginationParams,
            company_id: Optional[str] = None,
            sort_by: Optional[str] = None,
            sort_order: str = "asc",
            query: Optional[str] = None,
    ) -> Dict[str, Any]:
        conditions = [Contact.user_id == user_id]
        if company_id:
            conditions.append(Contact.company_id == company_id)
        if query and query.strip():
            pattern = f"%{query.strip()}%"
            conditions.append(or_(
                Contact.first_name.ilike(pattern),
                Contact.last_name.ilike(pattern),
                Contact.email.ilike(pattern),
                Contact.phone.ilike(pattern),
                Contact.job_title.ilike(pattern),
            ))

        last_interaction = (
            select(func.max(Interaction.occurred_at))
            .where(Interaction.contact_id == Contact.id)
            .correlate(Contact)
            .scalar_subquery()
        )

        descending = sort_order == "desc"
        if sort_by == "name":
            keys = [func.lower(Contact.first_name), func.lower(func.coalesce(Contact.last_name, ""))]
        elif sort_by == "created_at":
            keys = [Contact.created_at]
        elif sort_by == "last_interaction_at":
            keys = [func.coalesce(last_interaction, _EPOCH)]
        else:
            keys, descending = [Contact.updated_at], True

        order_by = [k.desc() if descending else k.asc() for k in keys] + [Contact.id]

        with self.db.session() as session:
            total = count_rows(session, Contact, *conditions)
            rows = session.execute(
                select(Contact, last_interaction.label("last_interaction_at"))
                .where(*conditions)
                .options(selectinload(Contact.company))
                .order_by(*order_by)
                .offset(pagination.offset)
                .limit(pagination.limit)
            ).all()

            data = []
            for contact, last_at in rows:
                item = contact_to_dict(contact)
                item["last_interaction_at"] = iso(last_at) if isinstance(last_at, datetime) else last_at
                data.append(item)

        return paginated_response(data, total, pagination)

    def update(self, user_id: str, contact_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            contact = get_owned(session, Contact, user_id, contact_id)
            if contact is None:
                return None
            if data.get("company_id"):
                require_owned(session, Company, user_id, data["company_id"], "Company")

            apply_updates(contact, data, CONTACT_FIELDS)
            contact.updated_at = utcnow()
            session.flush()
            session.refresh(contact, attribute_names=["company"])
            out = contact_to_dict(contact)

        self._reindex(user_id, contact_id)
        return out

    def delete(self, user_id: str, contact_id: str) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            contact = get_owned(session, Contact, user_id, contact_id, selectinload(Contact.company))
            if contact is None:
                return None
            out = contact_to_dict(contact)
            session.delete(contact)

        if self.search is not None:
            self.search.remove_contact(user_id, contact_id)
        self.logger.info("Deleted contact %s", contact_id)
        return out

    def _reindex(self, user_id: str, contact_id: str) -> None:
        if self.search is not None:
            self.search.index_contact(user_id, contact_id)
