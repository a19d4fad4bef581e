#!/usr/bin/env python3
"""
Database Initializer

Creates/migrates the schema and inserts the seed data (default admin and
sample jobs) without starting the web server. Safe to run repeatedly.

Usage: python scripts/init_db.py
"""
import sys
sys.path.insert(0, '.')

from jobboard.core.config import get_settings
from jobboard.core.logging import setup_logging
from jobboard.core.security import PasswordHasher
from jobboard.db.database import Database
from jobboard.db.schema import bootstrap_schema
from jobboard.db.seed import seed_data


def main():
    settings = get_settings()
    setup_logging(settings)

    db = Database(settings.sqlalchemy_url, echo=settings.sql_echo)
    db.connect()
    try:
        bootstrap_schema(db)
        seed_data(db, PasswordHasher(rounds=settings.bcrypt_rounds), settings)
    finally:
        db.dispose()
    print("Database initialized.")


if __name__ == "__main__":
    main()
