"""Store-scoped configuration reader backed by ``core_config_data``.

A value set for the current store wins over the ``default`` scope value.
Values are stored as text; callers coerce them.
"""

from __future__ import annotations

import sqlite3
from typing import Optional

from blog_backend.config import settings

SCOPE_DEFAULT = "default"
SCOPE_STORE = "store"

# Paths read by the data providers
XML_RELATED_POSTS_ENABLED = "mfblog/post_view/related_posts/enabled"
XML_RELATED_POSTS_NUMBER = "mfblog/post_view/related_posts/number_of_posts"
XML_RELATED_PRODUCTS_ENABLED = "mfblog/post_view/related_products/enabled"
XML_RELATED_PRODUCTS_NUMBER = "mfblog/post_view/related_products/number_of_products"
XML_SHORT_CONTENT_LENGTH = "mfblog/post_list/shortcontent_length"
XML_PERMALINK_ROUTE = "mfblog/permalink/route"
XML_PERMALINK_POST_PREFIX = "mfblog/permalink/post_route"
XML_PERMALINK_TAG_PREFIX = "mfblog/permalink/tag_route"
XML_PERMALINK_CATEGORY_PREFIX = "mfblog/permalink/category_route"
XML_PERMALINK_AUTHOR_PREFIX = "mfblog/permalink/author_route"
XML_PERMALINK_SUFFIX = "mfblog/permalink/post_sufix"
XML_DESIGN_THEME_ID = "design/theme/theme_id"

_FALSY = {"", "0", "false", "no", "off"}


class ScopeConfig:
    """Read-only view over ``core_config_data`` for one store."""

    def __init__(self, conn: sqlite3.Connection, store_id: Optional[int] = None) -> None:
        self.conn = conn
        self.store_id = settings.store_id if store_id is None else store_id

    def get_value(self, path: str, scope: str = SCOPE_STORE) -> Optional[str]:
        """Return the configured value for *path*, or ``None`` when unset.

        Args:
            path: Slash-separated config path, e.g.
                ``mfblog/post_view/related_posts/enabled``.
            scope: ``"store"`` (store row, then default row) or ``"default"``.
        """
        if scope == SCOPE_STORE:
            row = self.conn.execute(
                """
                SELECT value FROM core_config_data
                WHERE  path = ? AND scope IN ('stores', 'store') AND scope_id = ?
                """,
                (path, self.store_id),
            ).fetchone()
            if row is not None:
                return row["value"]
        elif scope != SCOPE_DEFAULT:
            raise ValueError(f"Unsupported config scope {scope!r}")

        row = self.conn.execute(
            """
            SELECT value FROM core_config_data
            WHERE  path = ? AND scope = 'default' AND scope_id = 0
            """,
            (path,),
        ).fetchone()
        return row["value"] if row is not None else None

    def is_set_flag(self, path: str, scope: str = SCOPE_STORE) -> bool:
        value = self.get_value(path, scope)
        return value is not None and str(value).strip().lower() not in _FALSY

    def get_int(self, path: str, default: int = 0, scope: str = SCOPE_STORE) -> int:
        """Integer value of *path*; *default* when unset or not a number."""
        value = self.get_value(path, scope)
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            return default
