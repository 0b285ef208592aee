# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-06
# Description: common.py (shared helpers for the user-scoped CRM services)
# -----------------------------------------------------------------------------
from typing import Any, Dict, Iterable, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

T = TypeVar("T")


class EntityNotFoundError(LookupError):
    """A referenced entity does not exist or belongs to another user."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


def get_owned(session: Session, model: Type[T], user_id: str, entity_id: Optional[str], *options) -> Optional[T]:
    """Fetch a row by id only if it belongs to ``user_id``."""
    if not entity_id:
        return None
    stmt = select(model).where(model.id == entity_id, model.user_id == user_id)
    if options:
        stmt = stmt.options(*options)
    return session.scalars(stmt).first()


def require_owned(session: Session, model: Type[T], user_id: str, entity_id: str, label: str) -> T:
    row = get_owned(session, model, user_id, entity_id)
    if row is None:
        raise EntityNotFoundError(label, entity_id)
    return row


def apply_updates(row: Any, data: Dict[str, Any], allowed: Iterable[str]) -> bool:
    """Copy the allowed keys of ``data`` onto ``row``. Returns True if anything changed."""
    changed = False
    for key in allowed:
        if key in data and getattr(row, key) != data[key]:
            setattr(row, key, data[key])
            changed = True
    return changed


def count_rows(session: Session, model: Any, *conditions) -> int:
    return int(session.scalar(select(func.count()).select_from(model).where(*conditions)) or 0)
