# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-08
# Description: CRMStatsService.py
# -----------------------------------------------------------------------------

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy import func, select

from persistence.Database import Database
from persistence.models import (
    INTERACTION_TYPES,
    NOTIFICATION_TYPES,
    SENTIMENTS,
    Company,
    Contact,
    Interaction,
    Note,
    Notification,
    utcnow,
)
from services.common import count_rows
from utility.logging_utils import get_class_logger

TIME_RANGES = {"7d": 7, "30d": 30, "all": None}
TOP_N = 10


class CRMStatsService:
    """
    Dashboard stats for the /stats endpoint.

    Responsibilities:
      - overview counts (entities + reminder states)
      - interaction activity, optionally limited to a time range
      - engagement (top contacts and companies)
      - reminder task breakdowns
      - growth and per-industry distribution
    """

    def __init__(
            self,
            *,
            db: Database,
            clock: Callable[[], datetime] = utcnow,
            logger: logging.Logger | None = None,
    ) -> None:
        self.db = db
        self.clock = clock
        self.logger = logger or get_class_logger(self.__class__)

    def get_stats(self, user_id: str, time_range: Optional[str] = "all") -> Dict[str, Any]:
        if time_range not in TIME_RANGES and time_range is not None:
            raise ValueError(f"Unknown time range: {time_range!r}")

        self.logger.info("Stats for user=%s time_range=%s", user_id, time_range or "all")
        now = self.clock()

        with self.db.session() as session:
            return {
                "overview": self._overview(session, user_id, now),
                "activity": self._activity(session, user_id, now, TIME_RANGES.get(time_range or "all")),
                "engagement": self._engagement(session, user_id),
                "tasks": self._tasks(session, user_id, now),
                "growth": self._growth(session, user_id, now),
                "industries": self._industries(session, user_id),
            }

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------
    @staticmethod
    def _overview(session, user_id: str, now: datetime) -> Dict[str, int]:
        open_ = (Notification.user_id == user_id, Notification.is_completed.is_(False))
        return {
            "total_companies": count_rows(session, Company, Company.user_id == user_id),
            "total_contacts": count_rows(session, Contact, Contact.user_id == user_id),
            "total_interactions": count_rows(session, Interaction, Interaction.user_id == user_id),
            "total_notes": count_rows(session, Note, Note.user_id == user_id),
            "pending_notifications": count_rows(session, Notification, *open_),
            "overdue_notifications": count_rows(session, Notification, *open_, Notification.due_date < now),
            "upcoming_notifications": count_rows(
                session, Notification, *open_,
                Notification.due_date >= now,
                Notification.due_date <= now + timedelta(days=7),
            ),
        }

    def _activity(self, session, user_id: str, now: datetime, days: Optional[int]) -> Dict[str, Any]:
        conditions = [Interaction.user_id == user_id]
        if days is not None:
            conditions.append(Interaction.occurred_at >= now - timedelta(days=days))

        by_type = self._group_counts(session, Interaction.type, conditions)
        by_sentiment = self._group_counts(session, Interaction.sentiment, conditions)

        thirty_days_ago = now - timedelta(days=30)
        day = func.date(Interaction.occurred_at)
        over_time = session.execute(
            select(day, func.count())
            .where(Interaction.user_id == user_id, Interaction.occurred_at >= thirty_days_ago)
            .group_by(day)
            .order_by(day)
        ).all()

        return {
            "by_type": {t: by_type.get(t, 0) for t in INTERACTION_TYPES},
            "by_sentiment": {s: by_sentiment.get(s, 0) for s in SENTIMENTS},
            "recent": {
                "last_7_days": count_rows(
                    session, Interaction, Interaction.user_id == user_id,
                    Interaction.occurred_at >= now - timedelta(days=7),
                ),
                "last_30_days": count_rows(
                    session, Interaction, Interaction.user_id == user_id,
                    Interaction.occurred_at >= thirty_days_ago,
                ),
            },
            "over_time": [{"date": str(d), "count": int(c)} for d, c in over_time],
        }

    @staticmethod
    def _engagement(session, user_id: str) -> Dict[str, Any]:
        n_interactions = func.count(Interaction.id)

        top_contacts = session.execute(
            select(Contact, n_interactions)
            .join(Interaction, Interaction.contact_id == Contact.id)
            .where(Interaction.user_id == user_id)
            .group_by(Contact.id)
            .order_by(n_interactions.desc(), Contact.id)
            .limit(TOP_N)
        ).all()

        without = count_rows(
            session, Contact,
            Contact.user_id == user_id,
            ~select(Interaction.id).where(Interaction.contact_id == Contact.id).exists(),
        )

        total_contacts = count_rows(session, Contact, Contact.user_id == user_id)
        total_interactions = count_rows(session, Interaction, Interaction.user_id == user_id)
        average = total_interactions / total_contacts if total_contacts else 0.0

        n_contacts = func.count(Contact.id)
        top_companies = session.execute(
            select(Company, n_contacts)
            .join(Contact, Contact.company_id == Company.id)
            .where(Contact.user_id == user_id)
            .group_by(Company.id)
            .order_by(n_contacts.desc(), Company.id)
            .limit(TOP_N)
        ).all()

        active_companies = session.execute(
            select(Company, n_interactions)
            .join(Contact, Contact.company_id == Company.id)
            .join(Interaction, Interaction.contact_id == Contact.id)
            .where(Interaction.user_id == user_id)
            .group_by(Company.id)
            .order_by(n_interactions.desc(), Company.id)
            .limit(TOP_N)
        ).all()

        return {
            "top_contacts": [
                {
                    "contact_id": c.id,
                    "interaction_count": int(n),
                    "contact": {"id": c.id, "first_name": c.first_name, "last_name": c.last_name, "email": c.email},
                }
                for c, n in top_contacts
            ],
            "contacts_without_interactions": without,
            "average_interactions_per_contact": round(average, 2),
            "top_companies": [
                {"company_id": c.id, "contact_count": int(n), "company": {"id": c.id, "name": c.name}}
                for c, n in top_companies
            ],
            "active_companies": [
                {"company_id": c.id, "interaction_count": int(n), "company": {"id": c.id, "name": c.name}}
                for c, n in active_companies
            ],
        }

    def _tasks(self, session, user_id: str, now: datetime) -> Dict[str, Any]:
        open_ = [Notification.user_id == user_id, Notification.is_completed.is_(False)]

        pending = self._group_counts(session, Notification.type, open_)
        overdue = self._group_counts(session, Notification.type, open_ + [Notification.due_date < now])
        upcoming = self._group_counts(
            session, Notification.type,
            open_ + [Notification.due_date >= now, Notification.due_date <= now + timedelta(days=7)],
        )

        total = count_rows(session, Notification, Notification.user_id == user_id)
        completed = count_rows(
            session, Notification, Notification.user_id == user_id, Notification.is_completed.is_(True)
        )

        return {
            "pending_by_type": {t: pending.get(t, 0) for t in NOTIFICATION_TYPES},
            "completion_rate": round(completed / total, 2) if total else 0.0,
            "overdue_breakdown": {t: overdue.get(t, 0) for t in NOTIFICATION_TYPES},
            "upcoming_by_type": {t: upcoming.get(t, 0) for t in NOTIFICATION_TYPES},
        }

    @staticmethod
    def _growth(session, user_id: str, now: datetime) -> Dict[str, Any]:
        week_ago = now - timedelta(days=7)
        month_ago = now - relativedelta(months=1)
        thirty_days_ago = now - timedelta(days=30)

        def trend(model) -> List[Dict[str, Any]]:
            day = func.date(model.created_at)
            rows = session.execute(
                select(day, func.count())
                .where(model.user_id == user_id, model.created_at >= thirty_days_ago)
                .group_by(day)
                .order_by(day)
            ).all()
            return [{"date": str(d), "count": int(c)} for d, c in rows]

        return {
            "new_contacts": {
                "this_week": count_rows(session, Contact, Contact.user_id == user_id, Contact.created_at >= week_ago),
                "this_month": count_rows(session, Contact, Contact.user_id == user_id, Contact.created_at >= month_ago),
                "all_time": count_rows(session, Contact, Contact.user_id == user_id),
            },
            "new_companies": {
                "this_week": count_rows(session, Company, Company.user_id == user_id, Company.created_at >= week_ago),
                "this_month": count_rows(session, Company, Company.user_id == user_id, Company.created_at >= month_ago),
                "all_time": count_rows(session, Company, Company.user_id == user_id),
            },
            "new_interactions": {
                "this_week": count_rows(
                    session, Interaction, Interaction.user_id == user_id, Interaction.occurred_at >= week_ago
                ),
                "this_month": count_rows(
                    session, Interaction, Interaction.user_id == user_id, Interaction.occurred_at >= month_ago
                ),
            },
            "trends": {"contacts": trend(Contact), "companies": trend(Company)},
        }

    @staticmethod
    def _industries(session, user_id: str) -> Dict[str, Any]:
        companies = session.execute(
            select(Company.industry, func.count())
            .where(Company.user_id == user_id, Company.industry.is_not(None))
            .group_by(Company.industry)
            .order_by(func.count().desc(), Company.industry)
        ).all()
        total = sum(int(c) for _, c in companies)

        contacts = session.execute(
            select(Company.industry, func.count(Contact.id))
            .join(Contact, Contact.company_id == Company.id)
            .where(Contact.user_id == user_id, Company.industry.is_not(None))
            .group_by(Company.industry)
        ).all()

        interactions = session.execute(
            select(Company.industry, func.count(Interaction.id))
            .join(Contact, Contact.company_id == Company.id)
            .join(Interaction, Interaction.contact_id == Contact.id)
            .where(Interaction.user_id == user_id, Company.industry.is_not(None))
            .group_by(Company.industry)
        ).all()

        return {
            "companies_by_industry": [
                {
                    "industry": industry,
                    "count": int(c),
                    "percentage": round(int(c) / total * 100, 2) if total else 0.0,
                }
                for industry, c in companies
            ],
            "contacts_by_industry": [{"industry": i, "count": int(c)} for i, c in contacts],
            "interactions_by_industry": [{"industry": i, "count": int(c)} for i, c in interactions],
        }

    @staticmethod
    def _group_counts(session, column, conditions) -> Dict[Any, int]:
        rows = session.execute(
            select(column, func.count()).where(*conditions).group_by(column)
        ).all()
        return {key: int(n) for key, n in rows}
