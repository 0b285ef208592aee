# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-04
# Description: CRMEntityIndexer
# -----------------------------------------------------------------------------
from typing import Any, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from embedding.EmbeddingRecord import EmbeddingRecord
from persistence.Database import Database
from persistence.models import ENTITY_TYPES, Contact, Note, utcnow
from utility.logging_utils import get_class_logger
from vectorstore.CRMVectorStore import CRMVectorStore


def build_contact_text(contact: Contact, notes: Iterable[Note] = ()) -> str:
    """
    Searchable text for a contact: first name, last name, email, job title,
    company name, then every note body. Empty or missing parts are skipped.
    """
    parts = [
        contact.first_name,
        contact.last_name,
        contact.email,
        contact.job_title,
        contact.company.name if contact.company is not None else None,
    ]
    parts.extend(n.content for n in notes)
    return " ".join(p.strip() for p in parts if p and p.strip())


class CRMEntityIndexer:
    """
    Turns entities into embedding records.

    Errors propagate: an embedding failure raises EmbeddingProviderError and
    leaves the existing record untouched. Callers that must not fail (the
    write paths) wrap this in CRMSearchService.index_contact.
    """

    def __init__(self, db: Database, embedder: Any, store: CRMVectorStore, logger: Any = None):
        self.db = db
        self.embedder = embedder
        self.store = store
        self.logger = logger or get_class_logger(self.__class__)

    def index_entity(self, user_id: str, entity_type: str, entity_id: str, text: str) -> EmbeddingRecord:
        if entity_type not in ENTITY_TYPES:
            raise ValueError(f"Unknown entity type: {entity_type!r}")

        vector = self.embedder.embed_text(text)
        record = EmbeddingRecord(
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
            source_text=text,
            vector=vector,
            created_at=utcnow(),
        )
        self.store.upsert(record)
        self.logger.info("Indexed %s %s (chars=%d)", entity_type, entity_id, len(text))
        return record

    def index_contact(self, user_id: str, contact_id: str) -> Optional[EmbeddingRecord]:
        text = self.contact_text(user_id, contact_id)
        if text is None:
            self.logger.debug("Contact %s not found for user %s; nothing to index", contact_id, user_id)
            return None
        return self.index_entity(user_id, "contact", contact_id, text)

    def contact_text(self, user_id: str, contact_id: str) -> Optional[str]:
        with self.db.session() as session:
            contact = session.scalars(
                select(Contact)
                .where(Contact.id == contact_id, Contact.user_id == user_id)
                .options(selectinload(Contact.company))
            ).first()
            if contact is None:
                return None

            notes = session.scalars(
                select(Note)
                .where(Note.contact_id == contact_id, Note.user_id == user_id)
                .order_by(Note.created_at, Note.id)
            ).all()
            return build_contact_text(contact, notes)
