# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-06
# Description: CRMInteractionService
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from persistence.Database import Database
from persistence.models import Contact, Interaction
from persistence.serializers import contact_to_dict, interaction_to_dict, note_to_dict, notification_to_dict
from services.common import apply_updates, count_rows, get_owned, require_owned
from utility.logging_utils import get_class_logger
from utility.pagination import PaginationParams, paginated_response

INTERACTION_FIELDS = ("type", "summary", "outcome", "sentiment", "occurred_at")


class CRMInteractionService:
    def __init__(self, *, db: Database, logger: logging.Logger | None = None):
        self.db = db
        self.logger = logger or get_class_logger(self.__class__)

    def create(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        with self.db.session() as session:
            require_owned(session, Contact, user_id, data["contact_id"], "Contact")

            interaction = Interaction(
                user_id=user_id,
                contact_id=data["contact_id"],
                **{k: data.get(k) for k in INTERACTION_FIELDS},
            )
            session.add(interaction)
            session.flush()
            out = interaction_to_dict(interaction)

        self.logger.info("Logged %s interaction %s for contact %s", out["type"], out["id"], out["contact_id"])
        return out

    def get(self, user_id: str, interaction_id: str) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            interaction = get_owned(
                session, Interaction, user_id, interaction_id,
                selectinload(Interaction.contact).selectinload(Contact.company),
                selectinload(Interaction.notes),
                selectinload(Interaction.notifications),
            )
            if interaction is None:
                return None

            out = interaction_to_dict(interaction)
            out["contact"] = contact_to_dict(interaction.contact) if interaction.contact else None
            out["notes"] = [note_to_dict(n) for n in interaction.notes]
            out["notifications"] = [notification_to_dict(n) for n in interaction.notifications]
            return out

    def list(
            self,
            user_id: str,
            pagination: PaginationParams,
            contact_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        conditions = [Interaction.user_id == user_id]
        if contact_id:
            conditions.append(Interaction.contact_id == contact_id)

        with self.db.session() as session:
            total = count_rows(session, Interaction, *conditions)
            rows = session.scalars(
                select(Interaction)
                .where(*conditions)
                .options(selectinload(Interaction.contact))
                .order_by(Interaction.occurred_at.desc(), Interaction.id)
                .offset(pagination.offset)
                .limit(pagination.limit)
            ).all()
            data = [interaction_to_dict(i, include_contact=True) for i in rows]

        return paginated_response(data, total, pagination)

    def list_by_contact(self, user_id: str, contact_id: str, pagination: PaginationParams) -> Dict[str, Any]:
        conditions = [Interaction.user_id == user_id, Interaction.contact_id == contact_id]

        with self.db.session() as session:
            total = count_rows(session, Interaction, *conditions)
            rows = session.scalars(
                select(Interaction)
                .where(*conditions)
                .options(selectinload(Interaction.notes))
                .order_by(Interaction.occurred_at.desc(), Interaction.id)
                .offset(pagination.offset)
                .limit(pagination.limit)
            ).all()

            data = []
            for i in rows:
                item = interaction_to_dict(i)
                item["notes"] = [note_to_dict(n) for n in i.notes]
                data.append(item)

        return paginated_response(data, total, pagination)

    def update(self, user_id: str, interaction_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            interaction = get_owned(session, Interaction, user_id, interaction_id)
            if interaction is None:
                return None
            apply_updates(interaction, data, INTERACTION_FIELDS)
            session.flush()
            return interaction_to_dict(interaction)

    def delete(self, user_id: str, interaction_id: str) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            interaction = get_owned(session, Interaction, user_id, interaction_id)
            if interaction is None:
                return None
            out = interaction_to_dict(interaction)
            session.delete(interaction)

        self.logger.info("Deleted interaction %s", interaction_id)
        return out
