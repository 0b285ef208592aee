# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-01
# Description: Database
# -----------------------------------------------------------------------------
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from persistence.models import Base
from utility.logging_utils import get_class_logger


@dataclass
class Database:
    """
    Owns the SQLAlchemy engine and session factory.

    Services open one short-lived session per operation through ``session()``;
    a session is never shared between threads, so concurrent search branches
    each get their own.
    """
    database_url: str
    echo: bool = False
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        connect_args = {}
        if self.database_url.startswith("sqlite"):
            # FastAPI's threadpool hands sessions to worker threads
            connect_args["check_same_thread"] = False

        self.engine: Engine = create_engine(
            self.database_url,
            echo=self.echo,
            future=True,
            pool_pre_ping=True,
            connect_args=connect_args,
        )

        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        self.logger.info("Database engine ready (dialect=%s)", self.engine.dialect.name)

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    def create_all(self) -> None:
        """Create missing tables. Schema migrations are handled outside the app."""
        Base.metadata.create_all(self.engine)
        self.logger.info("Schema ensured (%d tables)", len(Base.metadata.tables))

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Transactional scope: commit on success, rollback on any exception."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> bool:
        """Round-trip ``SELECT 1``. Raises on failure so callers can report the reason."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        self.engine.dispose()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE / SET NULL unless this is on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
