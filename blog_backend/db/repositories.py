"""Read-side repositories for blog entities.

Every repository follows the same two-step contract::

    post = repo.create()          # empty, inactive entity
    repo.load(post, "42")         # hydrate in place (by id or identifier)

A value that matches nothing leaves the entity empty, so ``is_active`` stays
``False``; callers decide what "not found" means.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Generic, Iterator, Optional, TypeVar, Union

from blog_backend.db.models import Author, Category, Entity, Post, Product, Tag

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

EntityId = Union[int, str]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _is_numeric_id(value: EntityId) -> bool:
    return isinstance(value, int) or str(value).isdigit()


class _Repository(Generic[E]):
    """Shared load logic; subclasses only name their table and entity type."""

    table: str
    primary_key: str
    entity_class: type[E]

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def create(self) -> E:
        """Return a new, unpopulated entity."""
        return self.entity_class()

    def _hydrate(self, entity: E, row: Optional[sqlite3.Row]) -> E:
        if row is None:
            entity.id = None
            entity.data = {}
        else:
            entity.data = dict(row)
            entity.id = entity.data[self.primary_key]
        return entity

    def _from_row(self, row: sqlite3.Row) -> E:
        return self._hydrate(self.create(), row)

    def load(self, entity: E, value: EntityId) -> E:
        """Hydrate *entity* from the row whose id (or identifier) is *value*.

        Numeric values are matched against the primary key, anything else
        against the URL ``identifier``.
        """
        column = self.primary_key if _is_numeric_id(value) else "identifier"
        row = self.conn.execute(
            f"SELECT * FROM {self.table} WHERE {column} = ?",  # noqa: S608
            (value,),
        ).fetchone()
        logger.debug(
            "load %s %s=%r: %s", self.table, column, value, "hit" if row else "miss"
        )
        return self._hydrate(entity, row)

    def get_by_id(self, value: EntityId) -> E:
        """Shortcut for ``load(create(), value)``."""
        return self.load(self.create(), value)


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------

class PostCollection:
    """Lazily evaluated related-posts query.

    Filters are chainable and nothing is executed until iteration::

        for related in post.related_posts().add_active_filter().set_page_size(5):
            ...
    """

    def __init__(self, repository: "PostRepository", post_id: Optional[int]) -> None:
        self._repository = repository
        self._post_id = post_id
        self._active_only = False
        self._page_size: Optional[int] = None

    def add_active_filter(self) -> "PostCollection":
        self._active_only = True
        return self

    def set_page_size(self, page_size: Optional[int]) -> "PostCollection":
        self._page_size = page_size if page_size and page_size > 0 else None
        return self

    def _query(self) -> tuple[str, list[Any]]:
        sql = """
            SELECT p.*
            FROM   blog_post             AS p
            JOIN   blog_post_relatedpost AS r ON r.related_id = p.post_id
            WHERE  r.post_id = ?
        """
        params: list[Any] = [self._post_id]
        if self._active_only:
            sql += " AND p.is_active = 1"
        sql += " ORDER BY r.position ASC, p.post_id ASC"
        if self._page_size is not None:
            sql += " LIMIT ?"
            params.append(self._page_size)
        return sql, params

    def __iter__(self) -> Iterator[Post]:
        if self._post_id is None:
            return iter(())
        sql, params = self._query()
        rows = self._repository.conn.execute(sql, params).fetchall()
        return iter([self._repository._from_row(r) for r in rows])


class ProductCollection:
    """Related catalog products of a post, ordered by position."""

    def __init__(self, conn: sqlite3.Connection, post_id: Optional[int]) -> None:
        self._conn = conn
        self._post_id = post_id
        self._page_size: Optional[int] = None

    def set_page_size(self, page_size: Optional[int]) -> "ProductCollection":
        self._page_size = page_size if page_size and page_size > 0 else None
        return self

    def __iter__(self) -> Iterator[Product]:
        if self._post_id is None:
            return iter(())
        sql = """
            SELECT c.*
            FROM   catalog_product          AS c
            JOIN   blog_post_relatedproduct AS r ON r.related_id = c.entity_id
            WHERE  r.post_id = ?
            ORDER  BY r.position ASC, c.entity_id ASC
        """
        params: list[Any] = [self._post_id]
        if self._page_size is not None:
            sql += " LIMIT ?"
            params.append(self._page_size)
        rows = self._conn.execute(sql, params).fetchall()
        return iter([Product(id=r["entity_id"], data=dict(r)) for r in rows])


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class TagRepository(_Repository[Tag]):
    table = "blog_tag"
    primary_key = "tag_id"
    entity_class = Tag


class CategoryRepository(_Repository[Category]):
    table = "blog_category"
    primary_key = "category_id"
    entity_class = Category


class AuthorRepository(_Repository[Author]):
    table = "blog_author"
    primary_key = "author_id"
    entity_class = Author


class PostRepository(_Repository[Post]):
    table = "blog_post"
    primary_key = "post_id"
    entity_class = Post

    def create(self) -> Post:
        return Post(resource=self)

    def related_tags(self, post: Post) -> list[Tag]:
        """Active tags assigned to *post*, ordered by title."""
        rows = self.conn.execute(
            """
            SELECT t.*
            FROM   blog_tag      AS t
            JOIN   blog_post_tag AS pt ON pt.tag_id = t.tag_id
            WHERE  pt.post_id = ? AND t.is_active = 1
            ORDER  BY t.title ASC, t.tag_id ASC
            """,
            (post.id,),
        ).fetchall()
        return [Tag(id=r["tag_id"], data=dict(r)) for r in rows]

    def parent_categories(self, post: Post) -> list[Category]:
        """Active categories *post* is filed under, ordered by position."""
        rows = self.conn.execute(
            """
            SELECT c.*
            FROM   blog_category      AS c
            JOIN   blog_post_category AS pc ON pc.category_id = c.category_id
            WHERE  pc.post_id = ? AND c.is_active = 1
            ORDER  BY c.position ASC, c.category_id ASC
            """,
            (post.id,),
        ).fetchall()
        return [Category(id=r["category_id"], data=dict(r)) for r in rows]

    def author(self, post: Post) -> Optional[Author]:
        """The post's author, or ``None`` when unset, missing or inactive."""
        author_id = post.get("author_id")
        if author_id is None:
            return None
        author = AuthorRepository(self.conn).get_by_id(author_id)
        return author if author.is_active else None

    def related_posts(self, post: Post) -> PostCollection:
        return PostCollection(self, post.id)

    def related_products(self, post: Post) -> ProductCollection:
        return ProductCollection(self.conn, post.id)
