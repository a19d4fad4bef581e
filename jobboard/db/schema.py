"""
Relational schema and startup bootstrap.

Tables (creation order matters, applications references both users and jobs):
- users
- jobs
- applications
- sessions

bootstrap_schema() is safe to run on every startup. Older deployments whose
applications table predates the user_id column get it added, then the fk_user
constraint. "Already exists" errors from that ALTER are expected on every run
after the first and are ignored; anything else aborts startup.
"""

import logging

from sqlalchemy import (
    Column, DateTime, Enum, ForeignKey, Integer, MetaData, String, Table, Text,
    func, inspect, text,
)
from sqlalchemy.exc import DBAPIError

from jobboard.db.database import Database

logger = logging.getLogger(__name__)

metadata = MetaData()

users = Table(
    "users", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("name", String(255), nullable=False),
    Column("role", Enum("user", "admin", name="user_role"), nullable=False, server_default="user"),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

jobs = Table(
    "jobs", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("company", String(255), nullable=False),
    Column("description", Text, nullable=False),
    Column("deadline", DateTime, nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

applications = Table(
    "applications", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("job_id", Integer, ForeignKey("jobs.id", name="fk_job", ondelete="CASCADE"), nullable=False),
    Column("user_id", Integer, ForeignKey("users.id", name="fk_user", ondelete="SET NULL"), nullable=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone", String(50), nullable=False),
    Column("cover_letter", Text, nullable=False),
    Column("resume_path", String(255), nullable=False),
    Column("submitted_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

sessions = Table(
    "sessions", metadata,
    Column("token", String(64), primary_key=True),
    Column("user_id", Integer, nullable=False),
    Column("role", String(20), nullable=False),
    Column("created_at", DateTime, nullable=False),
    Column("expires_at", DateTime, nullable=False, index=True),
)

# Errors meaning "this constraint/key is already there"
IGNORABLE_PG_CODES = frozenset({"42710"})        # duplicate_object
IGNORABLE_MYSQL_CODES = frozenset({1061, 1826})  # ER_DUP_KEYNAME, ER_FK_DUP_NAME
IGNORABLE_MESSAGE = "already exists"


def is_already_exists_error(err: DBAPIError) -> bool:
    """True if a DDL failure only says the object is already present."""
    orig = getattr(err, "orig", None)
    if orig is None:
        return False

    pgcode = getattr(orig, "pgcode", None)
    if pgcode in IGNORABLE_PG_CODES:
        return True

    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int) and args[0] in IGNORABLE_MYSQL_CODES:
        return True

    return IGNORABLE_MESSAGE in str(orig).lower()


def ensure_column(db: Database, table: str, column: str, definition: str) -> bool:
    """Add a column if missing. Returns True when the column was added."""
    with db.transaction() as conn:
        existing = {col["name"] for col in inspect(conn).get_columns(table)}
        if column in existing:
            return False
        conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {definition}"))
    logger.info("Added column %s.%s", table, column)
    return True


def ensure_foreign_key(db: Database, table: str, name: str, definition: str) -> bool:
    """
    Add a named FK constraint, tolerating "already exists".
    Returns True when the constraint was added.
    """
    if db.is_sqlite:
        # SQLite has no ADD CONSTRAINT; the reference is declared with the column
        return False

    try:
        # own transaction so a failure doesn't poison later statements (postgres)
        with db.transaction() as conn:
            conn.execute(text(f"ALTER TABLE {table} ADD CONSTRAINT {name} {definition}"))
    except DBAPIError as err:
        if is_already_exists_error(err):
            logger.debug("Constraint %s on %s already present", name, table)
            return False
        raise
    logger.info("Added constraint %s on %s", name, table)
    return True


def bootstrap_schema(db: Database) -> None:
    """Create missing tables and apply the user_id backfill."""
    # create_all sorts by FK dependency: users, jobs, then applications
    metadata.create_all(db.engine, checkfirst=True)

    user_ref = "REFERENCES users(id) ON DELETE SET NULL"
    column_def = f"INTEGER {user_ref}" if db.is_sqlite else "INTEGER NULL"
    ensure_column(db, "applications", "user_id", column_def)
    ensure_foreign_key(db, "applications", "fk_user", f"FOREIGN KEY (user_id) {user_ref}")

    logger.info("Database schema ready")
