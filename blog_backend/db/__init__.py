"""Database layer package.

Public re-exports so callers can write::

    from blog_backend.db import get_connection, init_db
    from blog_backend.db import PostRepository, ScopeConfig
"""

from blog_backend.db.connection import get_connection
from blog_backend.db.migrations import init_db
from blog_backend.db.repositories import (
    AuthorRepository,
    CategoryRepository,
    PostRepository,
    TagRepository,
)
from blog_backend.db.scope_config import ScopeConfig

__all__ = [
    "get_connection",
    "init_db",
    "AuthorRepository",
    "CategoryRepository",
    "PostRepository",
    "TagRepository",
    "ScopeConfig",
]
