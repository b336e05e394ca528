"""Shared fixtures.

All tests use an in-memory SQLite database seeded with a small blog:

    posts       1 hello-world (active)   author 1, tags 1 2 3, categories 1 2 3
                2 second-post (active)   no author / tags / categories
                3 hidden-post (inactive)
                4 third-post  (active)   inactive author 2, tag 2
    related     1 -> 3 (pos 0, inactive), 2 (pos 1), 4 (pos 2)
                2 -> 1
                4 -> 2
    products    1 -> SKU-A, SKU-B, SKU-C
    tags        1 Python, 2 GraphQL, 3 Draft (inactive)
    categories  1 News (root), 2 Releases (child of 1), 3 Archive (inactive)
    themes      5 Magefan/blog
"""

from __future__ import annotations

import sqlite3
from typing import Callable, Generator

import pytest

from blog_backend.db.connection import get_connection
from blog_backend.db.migrations import init_db
from blog_backend.providers import DataProviders, create_providers

POST_1_CONTENT = (
    "<p>Intro paragraph.</p><!-- pagebreak -->"
    '<p>More <img src="{{media url="wysiwyg/inline.png"}}" alt="inline"></p>'
)


def _seed(conn: sqlite3.Connection) -> None:
    with conn:
        conn.executemany(
            "INSERT INTO blog_author (author_id, identifier, firstname, lastname, content, featured_img, is_active)"
            " VALUES (?, ?, ?, ?, ?, ?, ?)",
            [
                (1, "jane", "Jane", "Doe", "<p>Bio</p>", "authors/jane.jpg", 1),
                (2, "ghost", "Gone", "Writer", None, None, 0),
            ],
        )
        conn.executemany(
            "INSERT INTO blog_post (post_id, identifier, title, content, short_content, is_active,"
            " meta_title, meta_description, og_img, og_type, featured_img, custom_canonical_url, author_id)"
            " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [
                (1, "hello-world", "Hello World", POST_1_CONTENT, None, 1,
                 None, None, None, None, "blog/cover.jpg", None, 1),
                (2, "second-post", "Second Post", "<p>Second body</p>",
                 '<p>Short {{store url="contact"}}</p>', 1,
                 "Second SEO", "Custom description", "og/second.png", "blog", None,
                 "https://example.com/canonical", None),
                (3, "hidden-post", "Hidden", "<p>Hidden</p>", None, 0,
                 None, None, None, None, None, None, 1),
                (4, "third-post", "Third Post", "<p>Third</p>", None, 1,
                 None, None, None, None, None, None, 2),
            ],
        )
        conn.executemany(
            "INSERT INTO blog_tag (tag_id, identifier, title, content, is_active) VALUES (?, ?, ?, ?, ?)",
            [
                (1, "python", "Python", '<img src="{{view url="images/tag.png"}}">', 1),
                (2, "graphql", "GraphQL", "<p>Query language</p>", 1),
                (3, "draft", "Draft", None, 0),
            ],
        )
        conn.executemany(
            "INSERT INTO blog_category (category_id, identifier, title, content, path, position, is_active)"
            " VALUES (?, ?, ?, ?, ?, ?, ?)",
            [
                (1, "news", "News", "<p>All the news</p>", "", 0, 1),
                (2, "releases", "Releases", None, "1", 1, 1),
                (3, "archive", "Archive", None, "", 2, 0),
            ],
        )
        conn.executemany(
            "INSERT INTO blog_post_tag (post_id, tag_id) VALUES (?, ?)",
            [(1, 1), (1, 2), (1, 3), (4, 2)],
        )
        conn.executemany(
            "INSERT INTO blog_post_category (post_id, category_id) VALUES (?, ?)",
            [(1, 1), (1, 2), (1, 3)],
        )
        conn.executemany(
            "INSERT INTO blog_post_relatedpost (post_id, related_id, position) VALUES (?, ?, ?)",
            [(1, 3, 0), (1, 2, 1), (1, 4, 2), (2, 1, 0), (4, 2, 0)],
        )
        conn.executemany(
            "INSERT INTO catalog_product (entity_id, sku) VALUES (?, ?)",
            [(1, "SKU-A"), (2, "SKU-B"), (3, "SKU-C")],
        )
        conn.executemany(
            "INSERT INTO blog_post_relatedproduct (post_id, related_id, position) VALUES (?, ?, ?)",
            [(1, 3, 2), (1, 1, 0), (1, 2, 1)],
        )
        conn.execute(
            "INSERT INTO theme (theme_id, theme_path, theme_title, area) VALUES (5, 'Magefan/blog', 'Blog', 'frontend')"
        )


def _set_config(
    conn: sqlite3.Connection,
    path: str,
    value: str,
    scope: str = "default",
    scope_id: int = 0,
) -> None:
    with conn:
        conn.execute(
            """
            INSERT INTO core_config_data (scope, scope_id, path, value) VALUES (?, ?, ?, ?)
            ON CONFLICT (scope, scope_id, path) DO UPDATE SET value = excluded.value
            """,
            (scope, scope_id, path, value),
        )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def conn() -> Generator[sqlite3.Connection, None, None]:
    """In-memory connection with the schema initialised and the blog seeded."""
    connection = get_connection(db_path=":memory:")
    init_db(connection)
    _seed(connection)
    yield connection
    connection.close()


@pytest.fixture()
def seed() -> Callable[[sqlite3.Connection], None]:
    """Seed an arbitrary (e.g. on-disk) connection with the standard blog."""
    return _seed


@pytest.fixture()
def set_config(conn: sqlite3.Connection) -> Callable[..., None]:
    """Write a ``core_config_data`` row on the shared connection."""

    def _set(path: str, value: str, scope: str = "default", scope_id: int = 0) -> None:
        _set_config(conn, path, value, scope, scope_id)

    return _set


@pytest.fixture()
def providers(conn: sqlite3.Connection) -> DataProviders:
    return create_providers(conn, store_id=1)
