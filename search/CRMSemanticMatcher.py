# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-05
# Description: CRMSemanticMatcher
# -----------------------------------------------------------------------------
from typing import Any, Dict, List, Optional, Sequence

from search.VectorSimilarity import cosine_similarity
from vectorstore.CRMVectorStore import CRMVectorStore
from utility.logging_utils import get_class_logger

DEFAULT_LIMIT = 10


class CRMSemanticMatcher:
    """
    Embeds the query and scores it against every stored vector of the user.

    Full scan, no ANN index. The store is behind CRMVectorStore so an
    index-backed implementation can replace it without touching callers.
    """

    def __init__(self, embedder: Any, store: CRMVectorStore, logger: Any = None):
        self.embedder = embedder
        self.store = store
        self.logger = logger or get_class_logger(self.__class__)

    def semantic_search(
            self,
            user_id: str,
            query: str,
            entity_types: Optional[Sequence[str]] = None,
            limit: int = DEFAULT_LIMIT,
    ) -> List[Dict[str, Any]]:
        if not query or not query.strip() or limit <= 0:
            return []

        query_vec = self.embedder.embed_text(query)
        records = self.store.list_for_user(user_id, entity_types=entity_types)

        scored = []
        for record in records:
            try:
                score = cosine_similarity(query_vec, record.vector)
            except ValueError as e:
                # Vectors from an older embedding model; skip until reindexed
                self.logger.warning("Skipping %s %s: %s", record.entity_type, record.entity_id, e)
                continue
            scored.append((record, score))

        # Stable: equal scores keep load order
        scored.sort(key=lambda pair: pair[1], reverse=True)
        hits = [record.to_hit(score) for record, score in scored[:limit]]

        self.logger.debug(
            "Semantic search: query=%r types=%s scanned=%d returned=%d",
            query, list(entity_types) if entity_types else "all", len(records), len(hits),
        )
        return hits
