# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-04
# Description: SQLEmbeddingStore
# -----------------------------------------------------------------------------
from typing import Any, List, Optional, Sequence

from sqlalchemy import delete, select

from embedding.EmbeddingRecord import EmbeddingRecord
from persistence.Database import Database
from persistence.models import Embedding, new_id, utcnow
from utility.logging_utils import get_class_logger


class SQLEmbeddingStore:
    """
    Embedding records kept in the relational store, one row per
    (user_id, entity_type, entity_id).

    There is no ANN index: reads return every record for a user and the
    semantic matcher scores them in memory. Fine for a single user's CRM,
    linear in the number of indexed entities.
    """

    def __init__(self, db: Database, logger: Any = None):
        self.db = db
        self.logger = logger or get_class_logger(self.__class__)

    def test_connection(self) -> bool:
        return self.db.ping()

    def upsert(self, record: EmbeddingRecord) -> None:
        values = {
            "id": new_id(),
            "user_id": record.user_id,
            "entity_type": record.entity_type,
            "entity_id": record.entity_id,
            "source_text": record.source_text,
            "vector": [float(x) for x in record.vector],
            "created_at": record.created_at or utcnow(),
        }

        dialect = self.db.dialect
        with self.db.session() as session:
            if dialect in ("sqlite", "postgresql"):
                if dialect == "sqlite":
                    from sqlalchemy.dialects.sqlite import insert
                else:
                    from sqlalchemy.dialects.postgresql import insert

                stmt = insert(Embedding).values(**values)
                stmt = stmt.on_conflict_do_update(
                    index_elements=["user_id", "entity_type", "entity_id"],
                    set_={
                        "source_text": stmt.excluded.source_text,
                        "vector": stmt.excluded.vector,
                        "created_at": stmt.excluded.created_at,
                    },
                )
                session.execute(stmt)
            else:
                # No portable upsert; the session transaction keeps this atomic
                session.execute(self._delete_stmt(record.user_id, record.entity_type, record.entity_id))
                session.add(Embedding(**values))

        self.logger.debug(
            "Upserted embedding (user=%s, %s=%s, dim=%d)",
            record.user_id, record.entity_type, record.entity_id, len(values["vector"]),
        )

    def list_for_user(
            self,
            user_id: str,
            entity_types: Optional[Sequence[str]] = None,
    ) -> List[EmbeddingRecord]:
        with self.db.session() as session:
            rows = session.scalars(
                select(Embedding)
                .where(Embedding.user_id == user_id)
                .order_by(Embedding.created_at, Embedding.id)
            ).all()
            records = [EmbeddingRecord.from_row(r) for r in rows]

        # Type filter applied after load
        if entity_types:
            wanted = set(entity_types)
            records = [r for r in records if r.entity_type in wanted]
        return records

    def delete(self, user_id: str, entity_type: str, entity_id: str) -> int:
        with self.db.session() as session:
            result = session.execute(self._delete_stmt(user_id, entity_type, entity_id))
            return result.rowcount or 0

    @staticmethod
    def _delete_stmt(user_id: str, entity_type: str, entity_id: str):
        return delete(Embedding).where(
            Embedding.user_id == user_id,
            Embedding.entity_type == entity_type,
            Embedding.entity_id == entity_id,
        )
