# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-05
# Description: CRMSearchService
# -----------------------------------------------------------------------------
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import selectinload

import settings
from persistence.Database import Database
from persistence.models import Contact
from persistence.serializers import contact_to_dict
from search.CRMEntityIndexer import CRMEntityIndexer
from search.CRMFuzzyMatcher import CRMFuzzyMatcher
from search.CRMSemanticMatcher import CRMSemanticMatcher
from utility.logging_utils import get_class_logger


class CRMSearchService:
    """
    Search facade used by the REST search endpoints and the assistant tools.

    Responsibilities:
      - hybrid contact search (fuzzy + semantic, merged into three buckets)
      - fuzzy company search
      - raw semantic search across entity types
      - best-effort contact indexing for the write paths
    """

    def __init__(
            self,
            *,
            db: Database,
            fuzzy: CRMFuzzyMatcher,
            semantic: CRMSemanticMatcher,
            indexer: CRMEntityIndexer,
            fuzzy_threshold: float = settings.FUZZY_THRESHOLD,
            bucket_cap: int = settings.HYBRID_BUCKET_CAP,
            logger: logging.Logger | None = None,
    ) -> None:
        self.db = db
        self.fuzzy = fuzzy
        self.semantic = semantic
        self.indexer = indexer
        self.fuzzy_threshold = fuzzy_threshold
        self.bucket_cap = bucket_cap
        self.logger = logger or get_class_logger(self.__class__)

    # -------------------------------------------------------------------------
    # Hybrid
    # -------------------------------------------------------------------------
    def search(self, user_id: str, query: str) -> Dict[str, List[Dict[str, Any]]]:
        """
        Hybrid contact search.

        best_matches: fuzzy hits also found semantically, fuzzy order, uncapped.
        fuzzy_matches: the remaining fuzzy hits, capped.
        semantic_matches: semantic-only hits re-fetched as full contacts, capped.
        """
        if not query or not query.strip():
            return {"best_matches": [], "fuzzy_matches": [], "semantic_matches": []}

        # Each branch opens its own session inside the matcher
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="crm-search") as pool:
            fuzzy_future = pool.submit(
                self._run_branch, "fuzzy",
                lambda: self.fuzzy.fuzzy_search_contacts(user_id, query, self.fuzzy_threshold),
            )
            semantic_future = pool.submit(
                self._run_branch, "semantic",
                lambda: self.semantic.semantic_search(user_id, query, entity_types=["contact"]),
            )
            fuzzy_results = fuzzy_future.result()
            semantic_results = semantic_future.result()

        return self.merge(user_id, fuzzy_results, semantic_results)

    def merge(
            self,
            user_id: str,
            fuzzy_results: List[Dict[str, Any]],
            semantic_results: List[Dict[str, Any]],
    ) -> Dict[str, List[Dict[str, Any]]]:
        fuzzy_ids = {r["id"] for r in fuzzy_results}
        semantic_ids = {r["entity_id"] for r in semantic_results}

        best = [r for r in fuzzy_results if r["id"] in semantic_ids]
        fuzzy_only = [r for r in fuzzy_results if r["id"] not in semantic_ids][: self.bucket_cap]

        semantic_only = [r for r in semantic_results if r["entity_id"] not in fuzzy_ids][: self.bucket_cap]
        hydrated = self._hydrate_contacts(user_id, semantic_only)

        self.logger.info(
            "Hybrid search: best=%d fuzzy=%d semantic=%d", len(best), len(fuzzy_only), len(hydrated)
        )
        return {"best_matches": best, "fuzzy_matches": fuzzy_only, "semantic_matches": hydrated}

    def _run_branch(self, name: str, fn: Callable[[], List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        try:
            return fn()
        except Exception as e:
            self.logger.error("Hybrid %s branch failed, continuing without it: %s", name, e)
            return []

    def _hydrate_contacts(self, user_id: str, hits: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if not hits:
            return []

        ids = [h["entity_id"] for h in hits]
        with self.db.session() as session:
            rows = session.scalars(
                select(Contact)
                .where(Contact.user_id == user_id, Contact.id.in_(ids))
                .options(selectinload(Contact.company))
            ).all()
            by_id = {c.id: contact_to_dict(c) for c in rows}

        out: List[Dict[str, Any]] = []
        for h in hits:
            contact = by_id.get(h["entity_id"])
            if contact is None:
                # Stale embedding for a deleted contact
                continue
            out.append({**contact, "score": round(h["score"], 4)})
        return out

    # -------------------------------------------------------------------------
    # Single-strategy
    # -------------------------------------------------------------------------
    def search_companies(self, user_id: str, query: str) -> Dict[str, List[Dict[str, Any]]]:
        if not query or not query.strip():
            return {"companies": []}
        return {"companies": self.fuzzy.fuzzy_search_companies(user_id, query, self.fuzzy_threshold)}

    def semantic_search(
            self,
            user_id: str,
            query: str,
            entity_types: Optional[Sequence[str]] = None,
            limit: int = settings.SEMANTIC_LIMIT,
    ) -> List[Dict[str, Any]]:
        return self.semantic.semantic_search(user_id, query, entity_types=entity_types, limit=limit)

    # -------------------------------------------------------------------------
    # Indexing
    # -------------------------------------------------------------------------
    def index_contact(self, user_id: str, contact_id: str) -> bool:
        """Reindex a contact. Never raises; the contact stays fuzzy-searchable on failure."""
        try:
            return self.indexer.index_contact(user_id, contact_id) is not None
        except Exception as e:
            self.logger.warning("Indexing contact %s failed, skipped: %s", contact_id, e)
            return False

    def remove_contact(self, user_id: str, contact_id: str) -> None:
        try:
            self.indexer.store.delete(user_id, "contact", contact_id)
        except Exception as e:
            self.logger.warning("Removing embedding for contact %s failed: %s", contact_id, e)
