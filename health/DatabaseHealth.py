# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-10
# Description: DatabaseHealth
# -----------------------------------------------------------------------------
import logging
import time
from typing import Optional

from sqlalchemy import inspect

from persistence.Database import Database
from persistence.models import Base
from utility.logging_utils import get_logger


class DatabaseHealth:
    """
    Smoke test for the relational store.

    Verifies:
      - a SELECT 1 round-trip succeeds
      - every mapped table exists
    """

    def __init__(self, db: Database, logger: Optional[logging.Logger] = None):
        self.db = db
        self.logger = logger or get_logger(__name__)

    def run(self) -> bool:
        self.logger.info("Running database healthcheck (dialect=%s)", self.db.dialect)
        try:
            start = time.time()
            self.db.ping()
            elapsed_ms = (time.time() - start) * 1000.0
            self.logger.info("Database ping succeeded in %.1f ms.", elapsed_ms)

            existing = set(inspect(self.db.engine).get_table_names())
            missing = sorted(set(Base.metadata.tables) - existing)
            if missing:
                self.logger.error("Missing tables: %s", ", ".join(missing))
                return False

            self.logger.info("Database healthcheck PASSED.")
            return True

        except Exception as e:
            self.logger.exception("Database healthcheck FAILED: %s", e)
            return False
