# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-04
# Description: CRMVectorStore
# -----------------------------------------------------------------------------

from typing import List, Optional, Protocol, Sequence, runtime_checkable

from embedding.EmbeddingRecord import EmbeddingRecord


@runtime_checkable
class CRMVectorStore(Protocol):
    def test_connection(self) -> bool:
        ...

    def upsert(self, record: EmbeddingRecord) -> None:
        ...

    def list_for_user(
            self,
            user_id: str,
            entity_types: Optional[Sequence[str]] = None,
    ) -> List[EmbeddingRecord]:
        ...

    def delete(self, user_id: str, entity_type: str, entity_id: str) -> int:
        ...
