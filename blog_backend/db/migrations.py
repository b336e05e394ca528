"""Database initialisation.

``init_db(conn)`` applies the bundled read-model schema.  Every statement in
``schema.sql`` is idempotent, so this is safe to call on an existing database.
"""

from __future__ import annotations

import sqlite3

from blog_backend.config import settings


def _read_schema() -> str:
    """Load the bundled schema.sql."""
    return settings.schema_path.read_text(encoding="utf-8")


def init_db(conn: sqlite3.Connection) -> None:
    """Create all blog, catalog, config and theme tables plus their indexes."""
    conn.executescript(_read_schema())
