# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-06
# Description: CRMCompanyService
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import selectinload

from persistence.Database import Database
from persistence.models import Company, Contact, utcnow
from persistence.serializers import company_to_dict, contact_to_dict, note_to_dict
from services.common import apply_updates, count_rows, get_owned
from utility.logging_utils import get_class_logger
from utility.pagination import PaginationParams, paginated_response

COMPANY_FIELDS = ("name", "website", "industry", "address", "description")
COMPANY_SORT_FIELDS = ("name", "created_at")


class CRMCompanyService:
    """
    User-scoped company CRUD.

    Company name is part of every member contact's searchable text, so a
    rename or delete reindexes those contacts through the search service.
    """

    def __init__(self, *, db: Database, search: Any = None, logger: logging.Logger | None = None):
        self.db = db
        self.search = search
        self.logger = logger or get_class_logger(self.__class__)

    def create(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        with self.db.session() as session:
            company = Company(user_id=user_id, **{k: data.get(k) for k in COMPANY_FIELDS})
            session.add(company)
            session.flush()
            out = company_to_dict(company)

        self.logger.info("Created company %s (%s)", out["id"], out["name"])
        return out

    def get(self, user_id: str, company_id: str) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            company = get_owned(
                session, Company, user_id, company_id,
                selectinload(Company.contacts), selectinload(Company.notes),
            )
            if company is None:
                return None

            out = company_to_dict(company)
            out["contacts"] = [contact_to_dict(c, include_company=False) for c in company.contacts]
            out["notes"] = [note_to_dict(n) for n in sorted(company.notes, key=lambda n: n.created_at, reverse=True)]
            return out

    def find_by_name(self, user_id: str, name: str) -> Optional[Dict[str, Any]]:
        """Exact, case-insensitive name lookup."""
        if not name or not name.strip():
            return None
        with self.db.session() as session:
            company = session.scalars(
                select(Company)
                .where(Company.user_id == user_id, func.lower(Company.name) == name.strip().lower())
                .order_by(Company.created_at)
            ).first()
            return company_to_dict(company) if company is not None else None

    def get_or_create_by_name(self, user_id: str, name: str) -> Dict[str, Any]:
        existing = self.find_by_name(user_id, name)
        if existing is not None:
            return existing
        return self.create(user_id, {"name": name.strip()})

    def list(
            self,
            user_id: str,
            pagination: PaginationParams,
            sort_by: Optional[str] = None,
            sort_order: str = "asc",
            query: Optional[str] = None,
    ) -> Dict[str, Any]:
        conditions = [Company.user_id == user_id]
        if query and query.strip():
            pattern = f"%{query.strip()}%"
            conditions.append(or_(
                Company.name.ilike(pattern),
                Company.industry.ilike(pattern),
                Company.description.ilike(pattern),
                Company.website.ilike(pattern),
            ))

        if sort_by == "name":
            order = func.lower(Company.name)
        elif sort_by == "created_at":
            order = Company.created_at
        else:
            order = None

        if order is None:
            order_by = [Company.updated_at.desc(), Company.id]
        else:
            order_by = [order.desc() if sort_order == "desc" else order.asc(), Company.id]

        with self.db.session() as session:
            total = count_rows(session, Company, *conditions)
            rows = session.scalars(
                select(Company)
                .where(*conditions)
                .options(selectinload(Company.contacts))
                .order_by(*order_by)
                .offset(pagination.offset)
                .limit(pagination.limit)
            ).all()

            data = []
            for c in rows:
                item = company_to_dict(c)
                item["contacts"] = [contact_to_dict(ct, include_company=False) for ct in c.contacts]
                data.append(item)

        return paginated_response(data, total, pagination)

    def update(self, user_id: str, company_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            company = get_owned(session, Company, user_id, company_id)
            if company is None:
                return None

            old_name = company.name
            apply_updates(company, data, COMPANY_FIELDS)
            company.updated_at = utcnow()
            session.flush()
            out = company_to_dict(company)
            renamed = company.name != old_name
            member_ids = self._member_ids(session, user_id, company_id) if renamed else []

        self._reindex(user_id, member_ids)
        return out

    def delete(self, user_id: str, company_id: str) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            company = get_owned(session, Company, user_id, company_id)
            if company is None:
                return None

            out = company_to_dict(company)
            member_ids = self._member_ids(session, user_id, company_id)
            session.delete(company)

        self.logger.info("Deleted company %s (%d contacts unlinked)", company_id, len(member_ids))
        self._reindex(user_id, member_ids)
        return out

    @staticmethod
    def _member_ids(session, user_id: str, company_id: str) -> List[str]:
        return list(session.scalars(
            select(Contact.id).where(Contact.user_id == user_id, Contact.company_id == company_id)
        ).all())

    def _reindex(self, user_id: str, contact_ids: List[str]) -> None:
        if self.search is None:
            return
        for contact_id in contact_ids:
            self.search.index_contact(user_id, contact_id)
