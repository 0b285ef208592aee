# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-10
# Description: keepalive.py
# -----------------------------------------------------------------------------
import math
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

import settings
from persistence.models import utcnow
from utility.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class KeepAliveState:
    """
    Process-wide record of the last successful database keep-alive ping.

    Starts unset. ``record_ping`` is the only mutation; an external scheduler
    hits /keepalive often and the database is pinged at most once per interval.
    """
    interval_days: int = settings.KEEPALIVE_INTERVAL_DAYS
    clock: Callable[[], datetime] = utcnow
    last_ping: Optional[datetime] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def interval(self) -> timedelta:
        return timedelta(days=self.interval_days)

    def ping_due(self) -> bool:
        return self.last_ping is None or self.clock() - self.last_ping >= self.interval

    def record_ping(self, when: datetime) -> None:
        with self._lock:
            self.last_ping = when

    def status(self) -> Dict[str, Any]:
        if self.last_ping is None:
            return {"last_ping": None, "next_ping_due": None, "days_until_next_ping": None}

        next_due = self.last_ping + self.interval
        days_left = math.ceil((next_due - self.clock()).total_seconds() / 86400)
        return {
            "last_ping": self.last_ping.isoformat(),
            "next_ping_due": next_due.isoformat(),
            "days_until_next_ping": max(days_left, 0),
        }

    def ping_database(self, db: Any) -> Dict[str, Any]:
        now = self.clock()
        if not self.ping_due():
            days_since = int((now - self.last_ping).total_seconds() // 86400)
            return {
                "success": True,
                "pinged": False,
                "message": f"Database ping not needed. Last ping was {days_since} days ago.",
            }

        try:
            db.ping()
        except Exception as e:
            logger.error("Database keep-alive ping failed: %s", e)
            return {"success": False, "pinged": False, "message": f"Database ping failed: {e}"}

        self.record_ping(now)
        logger.info("Database keep-alive ping successful. Next ping in %d days.", self.interval_days)
        return {"success": True, "pinged": True, "message": "Database ping successful"}


keepalive_state = KeepAliveState()
