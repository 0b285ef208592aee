# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-05
# Description: CRMFuzzyMatcher
# -----------------------------------------------------------------------------
"""
Lexical fuzzy matching over a user's contacts and companies.

Every call loads the user's full candidate set and filters in memory. That is
O(n) per search with no server-side paging, which is the scaling limit of
this matcher.

Scoring per candidate (distance, lower is better):

    1 - sum_t(w(t) * sim(t)) / (n_tokens * max_weight)

For each query token, sim is the best rapidfuzz similarity against any token
of a field; a (token, field) pair matches when 1 - sim <= threshold, and the
token takes the weight and similarity of its best weighted matching field.
A candidate needs at least one matching pair, and its final distance must
not exceed the threshold; anything scoring worse is excluded.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from persistence.Database import Database
from persistence.models import Company, Contact
from persistence.serializers import company_to_dict, contact_to_dict
from utility.logging_utils import get_class_logger

DEFAULT_THRESHOLD = 0.4

CONTACT_FIELD_WEIGHTS: Dict[str, float] = {
    "first_name": 2.0,
    "last_name": 2.0,
    "email": 1.5,
    "company_name": 1.0,
    "job_title": 0.5,
}

COMPANY_FIELD_WEIGHTS: Dict[str, float] = {
    "name": 1.0,
    "industry": 1.0,
    "description": 1.0,
}

_TOKEN_RE = re.compile(r"\S+")

# partial_ratio on short tokens lets stopwords like "the" or "who" match names
_PARTIAL_MIN_LEN = 4


@dataclass
class SearchCandidate:
    """Transient projection of a contact or company. Never persisted."""
    id: str
    fields: Dict[str, Optional[str]]
    payload: Dict[str, Any] = field(default_factory=dict)


def tokenize(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return _TOKEN_RE.findall(text.lower())


def token_similarity(token: str, other: str) -> float:
    score = fuzz.ratio(token, other)
    if len(token) >= _PARTIAL_MIN_LEN and len(other) >= _PARTIAL_MIN_LEN:
        score = max(score, fuzz.partial_ratio(token, other))
    return score / 100.0


def field_similarity(token: str, field_tokens: Sequence[str]) -> float:
    return max((token_similarity(token, ft) for ft in field_tokens), default=0.0)


def clamp_threshold(threshold: Optional[float]) -> float:
    if threshold is None:
        return DEFAULT_THRESHOLD
    return max(0.0, min(1.0, float(threshold)))


def score_candidate(
        query_tokens: Sequence[str],
        candidate: SearchCandidate,
        weights: Dict[str, float],
        threshold: float,
) -> Optional[float]:
    """Distance in [0, 1], or None when nothing matches or the distance exceeds threshold."""
    if not query_tokens:
        return None

    tokenized = {key: tokenize(candidate.fields.get(key)) for key in weights}
    max_weight = max(weights.values())

    total = 0.0
    matched_any = False
    for token in query_tokens:
        best = 0.0
        for key, weight in weights.items():
            ftokens = tokenized[key]
            if not ftokens:
                continue
            sim = field_similarity(token, ftokens)
            if 1.0 - sim <= threshold:
                matched_any = True
                best = max(best, weight * sim)
        total += best

    if not matched_any:
        return None
    distance = 1.0 - total / (len(query_tokens) * max_weight)
    if distance > threshold:
        return None
    return distance


def rank_candidates(
        query: str,
        candidates: Sequence[SearchCandidate],
        weights: Dict[str, float],
        threshold: Optional[float] = DEFAULT_THRESHOLD,
) -> List[Tuple[SearchCandidate, float]]:
    """Matching candidates best-first. Ties keep candidate order (sorted() is stable)."""
    tokens = tokenize(query)
    limit = clamp_threshold(threshold)

    scored: List[Tuple[SearchCandidate, float]] = []
    for c in candidates:
        score = score_candidate(tokens, c, weights, limit)
        if score is not None:
            scored.append((c, score))

    return sorted(scored, key=lambda pair: pair[1])


class CRMFuzzyMatcher:
    def __init__(self, db: Database, logger: Any = None):
        self.db = db
        self.logger = logger or get_class_logger(self.__class__)

    def load_contact_candidates(self, user_id: str) -> List[SearchCandidate]:
        with self.db.session() as session:
            contacts = session.scalars(
                select(Contact)
                .where(Contact.user_id == user_id)
                .options(selectinload(Contact.company))
                .order_by(Contact.created_at, Contact.id)
            ).all()

            return [
                SearchCandidate(
                    id=c.id,
                    fields={
                        "first_name": c.first_name,
                        "last_name": c.last_name,
                        "email": c.email,
                        "phone": c.phone,
                        "job_title": c.job_title,
                        "company_name": c.company.name if c.company else None,
                        "industry": c.company.industry if c.company else None,
                        "description": c.company.description if c.company else None,
                    },
                    payload=contact_to_dict(c),
                )
                for c in contacts
            ]

    def load_company_candidates(self, user_id: str) -> List[SearchCandidate]:
        with self.db.session() as session:
            companies = session.scalars(
                select(Company)
                .where(Company.user_id == user_id)
                .order_by(Company.created_at, Company.id)
            ).all()

            return [
                SearchCandidate(
                    id=c.id,
                    fields={"name": c.name, "industry": c.industry, "description": c.description},
                    payload=company_to_dict(c),
                )
                for c in companies
            ]

    def fuzzy_search_contacts(
            self,
            user_id: str,
            query: str,
            threshold: float = DEFAULT_THRESHOLD,
    ) -> List[Dict[str, Any]]:
        candidates = self.load_contact_candidates(user_id)
        ranked = rank_candidates(query, candidates, CONTACT_FIELD_WEIGHTS, threshold)
        self.logger.debug("Fuzzy contacts: query=%r candidates=%d matches=%d", query, len(candidates), len(ranked))
        return [{**c.payload, "score": round(score, 4)} for c, score in ranked]

    def fuzzy_search_companies(
            self,
            user_id: str,
            query: str,
            threshold: float = DEFAULT_THRESHOLD,
    ) -> List[Dict[str, Any]]:
        candidates = self.load_company_candidates(user_id)
        ranked = rank_candidates(query, candidates, COMPANY_FIELD_WEIGHTS, threshold)
        self.logger.debug("Fuzzy companies: query=%r candidates=%d matches=%d", query, len(candidates), len(ranked))
        return [{**c.payload, "score": round(score, 4)} for c, score in ranked]
