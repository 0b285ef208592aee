# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-09
# Description: CRMUserService
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict, Optional

from persistence.Database import Database
from persistence.models import User, utcnow
from persistence.serializers import user_to_dict
from utility.logging_utils import get_class_logger

PROFILE_FIELDS = ("email", "first_name", "last_name", "image_url")


class CRMUserService:
    """
    Local mirror of identity-provider users. The id is the provider's user id;
    rows are created the first time a user id is seen on a request.
    """

    def __init__(self, *, db: Database, logger: logging.Logger | None = None):
        self.db = db
        self.logger = logger or get_class_logger(self.__class__)

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            user = session.get(User, user_id)
            return user_to_dict(user) if user is not None else None

    def get_or_create(self, user_id: str, profile: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        profile = profile or {}
        with self.db.session() as session:
            user = session.get(User, user_id)
            if user is not None:
                return user_to_dict(user)

            user = User(
                id=user_id,
                email=profile.get("email") or "",
                first_name=profile.get("first_name"),
                last_name=profile.get("last_name"),
                image_url=profile.get("image_url"),
            )
            session.add(user)
            session.flush()
            self.logger.info("Registered user %s", user_id)
            return user_to_dict(user)

    def update(self, user_id: str, profile: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            user = session.get(User, user_id)
            if user is None:
                return None
            for key in PROFILE_FIELDS:
                if profile.get(key) is not None:
                    setattr(user, key, profile[key])
            user.updated_at = utcnow()
            session.flush()
            return user_to_dict(user)
