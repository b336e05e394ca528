"""Data providers package.

Build the whole provider graph for one store from a connection::

    from blog_backend.providers import create_providers

    providers = create_providers(conn)
    providers.post.get_data("42", {"title": None, "tags": None})
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Optional

from blog_backend.content.design import ThemeProvider
from blog_backend.content.filter import ContentFilter
from blog_backend.content.urls import UrlBuilder
from blog_backend.db.repositories import (
    AuthorRepository,
    CategoryRepository,
    PostRepository,
    TagRepository,
)
from blog_backend.db.scope_config import ScopeConfig
from blog_backend.providers.author import AuthorDataProvider
from blog_backend.providers.category import CategoryDataProvider
from blog_backend.providers.fields import FieldEnv
from blog_backend.providers.post import PostDataProvider
from blog_backend.providers.tag import TagDataProvider


@dataclass
class DataProviders:
    post: PostDataProvider
    tag: TagDataProvider
    category: CategoryDataProvider
    author: AuthorDataProvider


def create_providers(
    conn: sqlite3.Connection,
    store_id: Optional[int] = None,
    max_depth: Optional[int] = None,
) -> DataProviders:
    """Wire repositories, config and content services into the providers.

    Args:
        conn: Open DB connection.
        store_id: Store whose configuration applies (``settings.store_id``
            when omitted).
        max_depth: Override ``settings.related_posts_max_depth``.
    """
    config = ScopeConfig(conn, store_id=store_id)
    urls = UrlBuilder(config)
    env = FieldEnv(content_filter=ContentFilter(urls), urls=urls, config=config)

    tag = TagDataProvider(TagRepository(conn), env, ThemeProvider(conn))
    category = CategoryDataProvider(CategoryRepository(conn), env)
    author = AuthorDataProvider(AuthorRepository(conn), env)
    post = PostDataProvider(
        PostRepository(conn), tag, category, author, env, max_depth=max_depth
    )
    return DataProviders(post=post, tag=tag, category=category, author=author)


__all__ = [
    "DataProviders",
    "create_providers",
    "PostDataProvider",
    "TagDataProvider",
    "CategoryDataProvider",
    "AuthorDataProvider",
]
