"""Connection to the blog read-model database.

The database holds the blog entities, their relation tables, the catalog
products referenced by posts, store-scoped ``core_config_data`` and the
``theme`` table.  The providers only read from it; ``init_db`` creates it.

Pass ``":memory:"`` for a throwaway database (tests)::

    conn = get_connection(":memory:")
    init_db(conn)
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional, Union

from blog_backend.config import settings


def get_connection(db_path: Union[Path, str, None] = None) -> sqlite3.Connection:
    """Open the blog database with rows addressable by column name.

    Foreign keys are enforced so relation rows cannot point at missing posts,
    tags, categories or products.  On-disk databases use WAL journaling so
    the CLI can read while another process writes.

    Args:
        db_path: Database file or ``":memory:"``.  Defaults to
            ``settings.db_path`` inside the workspace.
    """
    path: Union[Path, str] = db_path or settings.db_path
    in_memory = str(path) == ":memory:"

    if not in_memory:
        settings.ensure_workspace()

    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row

    conn.execute("PRAGMA foreign_keys = ON")
    if not in_memory:
        conn.execute("PRAGMA journal_mode = WAL")

    return conn
