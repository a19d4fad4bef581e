"""
Database handle - owns the SQLAlchemy engine for one application instance.

Opened in the app lifespan, disposed at shutdown, and handed to every
service instead of living in a module-level global.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with FK enforcement off; cascades depend on it
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Usage:
        db = Database("postgresql://...")
        db.connect()
        with db.transaction() as conn:
            conn.execute(text("SELECT 1"))
        db.dispose()
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[Engine] = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self._engine

    def connect(self) -> Engine:
        """Create the engine (idempotent)."""
        if self._engine is not None:
            return self._engine

        if self.is_sqlite:
            engine = create_engine(
                self.url,
                echo=self.echo,
                connect_args={"check_same_thread": False},
            )
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        else:
            # pool_size=5: maintain 5 connections ready
            # max_overflow=10: allow 10 extra connections under load
            engine = create_engine(
                self.url,
                pool_size=5,
                max_overflow=10,
                pool_pre_ping=True,
                echo=self.echo,
            )
        self._engine = engine
        logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
        return engine

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("Database engine disposed")

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Connection inside a transaction: commit on success, rollback on error."""
        with self.engine.begin() as conn:
            yield conn

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """Plain connection for read-only work."""
        with self.engine.connect() as conn:
            yield conn

    def ping(self) -> bool:
        """
        Test if the database is reachable.
        Returns True if connection successful, False otherwise.
        """
        try:
            with self.connection() as conn:
                return conn.execute(text("SELECT 1")).scalar() == 1
        except Exception as e:
            logger.warning("Database connection failed: %s", e)
            return False
