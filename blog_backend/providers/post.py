"""Post data provider: field-filtered, recursively expanded post data.

``get_data(post_id, fields)`` is what a GraphQL resolver calls with the
selection tree of the query.  Relationship fields are resolved only when
selected; ``related_posts``, ``related_products`` and ``canonical_url`` are
opt-in and never appear under unbounded (``None``) selection.
"""

from __future__ import annotations

import html
import logging
from typing import Any, Mapping, Optional, Union

from blog_backend.config import settings
from blog_backend.content.filter import first_image_src, html_to_text, truncate_text
from blog_backend.db import scope_config as cfg
from blog_backend.db.models import Post
from blog_backend.db.repositories import PostRepository
from blog_backend.providers.author import AuthorDataProvider
from blog_backend.providers.category import CategoryDataProvider
from blog_backend.providers.fields import (
    Computation,
    FieldEnv,
    FieldTree,
    apply_computed,
    description_from,
    entity_url,
    featured_image,
    filtered_content,
    image_url,
    is_requested,
    is_selected,
    meta_title,
    sub_fields,
)
from blog_backend.providers.loader import load_active
from blog_backend.providers.tag import TagDataProvider

logger = logging.getLogger(__name__)

PAGEBREAK = "<!-- pagebreak -->"


# ---------------------------------------------------------------------------
# Computed fields
# ---------------------------------------------------------------------------

def short_filtered_content(post: Post, env: FieldEnv) -> str:
    """Teaser HTML: ``short_content`` if set, else content up to the page break.

    Without a page break the text is cut to the configured list length and
    HTML-escaped again.
    """
    short = post.get("short_content")
    if short:
        return env.content_filter.filter(short)
    content = filtered_content(post, env)
    if PAGEBREAK in content:
        return content.split(PAGEBREAK, 1)[0]
    length = env.config.get_int(cfg.XML_SHORT_CONTENT_LENGTH, 0)
    if length > 0:
        text = html_to_text(content)
        if len(text) > length:
            return html.escape(truncate_text(text, length), quote=False)
    return content


def post_meta_description(post: Post, env: FieldEnv) -> str:
    return post.get("meta_description") or description_from(short_filtered_content(post, env))


def og_title(post: Post, env: FieldEnv) -> Optional[str]:
    return post.get("og_title") or meta_title(post, env)


def og_description(post: Post, env: FieldEnv) -> str:
    return post.get("og_description") or post_meta_description(post, env)


def og_type(post: Post, env: FieldEnv) -> str:
    return post.get("og_type") or "article"


def first_image(post: Post, env: FieldEnv) -> Optional[str]:
    return first_image_src(filtered_content(post, env))


def og_image(post: Post, env: FieldEnv) -> Optional[str]:
    return (
        image_url(post.get("og_img"), env)
        or featured_image(post, env)
        or first_image(post, env)
    )


post_url = entity_url("post")


def canonical_url(post: Post, env: FieldEnv) -> str:
    return post.get("custom_canonical_url") or post_url(post, env)


# Evaluated in this order; canonical_url is opt-in and handled separately.
POST_COMPUTED_FIELDS: Mapping[str, Computation] = {
    "og_image": og_image,
    "og_type": og_type,
    "og_description": og_description,
    "og_title": og_title,
    "meta_description": post_meta_description,
    "meta_title": meta_title,
    "short_filtered_content": short_filtered_content,
    "filtered_content": filtered_content,
    "first_image": first_image,
    "featured_image": featured_image,
    "post_url": post_url,
}


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------

class PostDataProvider:
    def __init__(
        self,
        post_repository: PostRepository,
        tag: TagDataProvider,
        category: CategoryDataProvider,
        author: AuthorDataProvider,
        env: FieldEnv,
        max_depth: Optional[int] = None,
    ) -> None:
        self.post_repository = post_repository
        self.tag = tag
        self.category = category
        self.author = author
        self.env = env
        self.max_depth = settings.related_posts_max_depth if max_depth is None else max_depth

    def get_data(self, post_id: Union[int, str], fields: FieldTree = None) -> dict[str, Any]:
        """Load an active post and materialize the selected fields.

        Raises:
            NoSuchEntityError: If the post does not exist or is inactive.
        """
        post = load_active(self.post_repository, post_id)
        return self.get_dynamic_data(post, fields)

    def get_dynamic_data(self, post: Post, fields: FieldTree = None) -> dict[str, Any]:
        """Base data plus every selected computed and relationship field."""
        return self._materialize(post, fields, depth=0)

    def _materialize(self, post: Post, fields: FieldTree, depth: int) -> dict[str, Any]:
        data = post.get_data()
        apply_computed(post, fields, POST_COMPUTED_FIELDS, self.env, data)

        if is_selected(fields, "tags"):
            # Tags always come back in full; a nested selection is not applied.
            data["tags"] = [self.tag.get_dynamic_data(tag) for tag in post.related_tags()]

        if is_requested(fields, "related_posts"):
            data["related_posts"] = self._related_posts(
                post, sub_fields(fields, "related_posts"), depth
            )

        if is_requested(fields, "related_products"):
            data["related_products"] = self._related_products(post)

        if is_selected(fields, "categories"):
            nested = sub_fields(fields, "categories")
            data["categories"] = [
                self.category.get_dynamic_data(category, nested)
                for category in post.parent_categories()
            ]

        if is_selected(fields, "author"):
            author = post.author()
            if author is not None:
                data["author"] = self.author.get_dynamic_data(author)

        if is_requested(fields, "canonical_url"):
            data["canonical_url"] = canonical_url(post, self.env)

        return data

    # ------------------------------------------------------------------
    # Related content
    # ------------------------------------------------------------------
    def _page_size(self, path: str) -> int:
        size = self.env.config.get_int(path, 0)
        return size if size > 0 else settings.default_page_size

    def _related_posts(
        self, post: Post, fields: FieldTree, depth: int
    ) -> list[dict[str, Any]]:
        if not self.env.config.is_set_flag(cfg.XML_RELATED_POSTS_ENABLED):
            return []
        if depth >= self.max_depth:
            logger.debug(
                "related_posts of post %s not expanded: depth limit %d reached",
                post.id,
                self.max_depth,
            )
            return []
        collection = (
            post.related_posts()
            .add_active_filter()
            .set_page_size(self._page_size(cfg.XML_RELATED_POSTS_NUMBER))
        )
        return [self._materialize(related, fields, depth + 1) for related in collection]

    def _related_products(self, post: Post) -> list[str]:
        if not self.env.config.is_set_flag(cfg.XML_RELATED_PRODUCTS_ENABLED):
            return []
        collection = post.related_products().set_page_size(
            self._page_size(cfg.XML_RELATED_PRODUCTS_NUMBER)
        )
        return [product.sku for product in collection]
