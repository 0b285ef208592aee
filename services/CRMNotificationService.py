# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-07
# Description: CRMNotificationService
# -----------------------------------------------------------------------------
import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from persistence.Database import Database
from persistence.models import Contact, Interaction, Notification, utcnow
from persistence.serializers import interaction_to_dict, notification_to_dict
from services.common import apply_updates, count_rows, get_owned, require_owned
from utility.logging_utils import get_class_logger
from utility.pagination import PaginationParams, paginated_response

NOTIFICATION_FIELDS = ("contact_id", "interaction_id", "type", "title", "description", "due_date")
NOTIFICATION_STATUSES = ("pending", "upcoming", "overdue")

DEFAULT_UPCOMING_DAYS = 7


class CRMNotificationService:
    """
    Follow-up reminders.

    Status windows, all for incomplete reminders only:
      pending   any due date (or none)
      upcoming  now <= due_date <= now + days
      overdue   due_date < now
    """

    def __init__(
            self,
            *,
            db: Database,
            clock: Callable[[], datetime] = utcnow,
            logger: logging.Logger | None = None,
    ):
        self.db = db
        self.clock = clock
        self.logger = logger or get_class_logger(self.__class__)

    # -------------------------------------------------------------------------
    # Status filters
    # -------------------------------------------------------------------------
    def _status_conditions(self, user_id: str, status: Optional[str], days: int = DEFAULT_UPCOMING_DAYS) -> List[Any]:
        conditions = [Notification.user_id == user_id]
        if status is None:
            return conditions
        if status not in NOTIFICATION_STATUSES:
            raise ValueError(f"Unknown notification status: {status!r}")

        now = self.clock()
        conditions.append(Notification.is_completed.is_(False))
        if status == "upcoming":
            conditions.append(Notification.due_date >= now)
            conditions.append(Notification.due_date <= now + timedelta(days=days))
        elif status == "overdue":
            conditions.append(Notification.due_date < now)
        return conditions

    def _page(self, conditions: List[Any], pagination: PaginationParams, newest_first: bool = False) -> Dict[str, Any]:
        # Reminders without a due date sort last either way
        order_by = [Notification.due_date.is_(None)]
        order_by.append(Notification.due_date.desc() if newest_first else Notification.due_date.asc())
        order_by.append(Notification.created_at)

        with self.db.session() as session:
            total = count_rows(session, Notification, *conditions)
            rows = session.scalars(
                select(Notification)
                .where(*conditions)
                .options(selectinload(Notification.contact), selectinload(Notification.interaction))
                .order_by(*order_by)
                .offset(pagination.offset)
                .limit(pagination.limit)
            ).all()
            data = [self._with_parents(n) for n in rows]

        return paginated_response(data, total, pagination)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def list(
            self,
            user_id: str,
            pagination: PaginationParams,
            contact_id: Optional[str] = None,
            completed: Optional[bool] = None,
    ) -> Dict[str, Any]:
        conditions = [Notification.user_id == user_id]
        if contact_id:
            conditions.append(Notification.contact_id == contact_id)
        if completed is not None:
            conditions.append(Notification.is_completed.is_(completed))
        return self._page(conditions, pagination, newest_first=True)

    def count(self, user_id: str, status: Optional[str] = None, days: int = DEFAULT_UPCOMING_DAYS) -> int:
        conditions = self._status_conditions(user_id, status, days)
        with self.db.session() as session:
            return count_rows(session, Notification, *conditions)

    def pending(self, user_id: str, pagination: PaginationParams) -> Dict[str, Any]:
        return self._page(self._status_conditions(user_id, "pending"), pagination)

    def upcoming(self, user_id: str, pagination: PaginationParams, days: int = DEFAULT_UPCOMING_DAYS) -> Dict[str, Any]:
        return self._page(self._status_conditions(user_id, "upcoming", days), pagination)

    def overdue(self, user_id: str, pagination: PaginationParams) -> Dict[str, Any]:
        return self._page(self._status_conditions(user_id, "overdue"), pagination)

    def get(self, user_id: str, notification_id: str) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            notification = get_owned(
                session, Notification, user_id, notification_id,
                selectinload(Notification.contact), selectinload(Notification.interaction),
            )
            return self._with_parents(notification) if notification is not None else None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    def create(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        with self.db.session() as session:
            self._check_parents(session, user_id, data)
            notification = Notification(
                user_id=user_id,
                is_completed=False,
                **{k: data.get(k) for k in NOTIFICATION_FIELDS},
            )
            if notification.type is None:
                notification.type = "general"
            session.add(notification)
            session.flush()
            out = notification_to_dict(notification)

        self.logger.info("Created %s reminder %s (due=%s)", out["type"], out["id"], out["due_date"])
        return out

    def update(self, user_id: str, notification_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            notification = get_owned(session, Notification, user_id, notification_id)
            if notification is None:
                return None
            self._check_parents(session, user_id, data)
            apply_updates(notification, data, NOTIFICATION_FIELDS)
            session.flush()
            return notification_to_dict(notification)

    def set_completed(self, user_id: str, notification_id: str, completed: bool) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            notification = get_owned(session, Notification, user_id, notification_id)
            if notification is None:
                return None
            notification.is_completed = completed
            notification.completed_at = self.clock() if completed else None
            session.flush()
            return notification_to_dict(notification)

    def complete(self, user_id: str, notification_id: str) -> Optional[Dict[str, Any]]:
        return self.set_completed(user_id, notification_id, True)

    def incomplete(self, user_id: str, notification_id: str) -> Optional[Dict[str, Any]]:
        return self.set_completed(user_id, notification_id, False)

    def delete(self, user_id: str, notification_id: str) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            notification = get_owned(session, Notification, user_id, notification_id)
            if notification is None:
                return None
            out = notification_to_dict(notification)
            session.delete(notification)
        return out

    @staticmethod
    def _check_parents(session, user_id: str, data: Dict[str, Any]) -> None:
        if data.get("contact_id"):
            require_owned(session, Contact, user_id, data["contact_id"], "Contact")
        if data.get("interaction_id"):
            require_owned(session, Interaction, user_id, data["interaction_id"], "Interaction")

    @staticmethod
    def _with_parents(notification: Notification) -> Dict[str, Any]:
        out = notification_to_dict(notification, include_contact=True)
        out["interaction"] = interaction_to_dict(notification.interaction) if notification.interaction else None
        return out
