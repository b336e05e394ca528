"""Field-selection helpers and computed fields shared by all entity types.

A field-selection tree is either ``None`` ("everything") or a mapping of
field name to a nested tree.  Only the presence of a key matters::

    {"title": None, "tags": None, "categories": {"category_url": None}}

Computed fields are declared per entity type as an ordered mapping of key to
computation; :func:`apply_computed` evaluates only the selected ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from blog_backend.content.filter import ContentFilter, html_to_text
from blog_backend.content.urls import UrlBuilder
from blog_backend.db.models import Entity
from blog_backend.db.scope_config import ScopeConfig

FieldTree = Optional[Mapping[str, Any]]

META_DESCRIPTION_LENGTH = 300


@dataclass
class FieldEnv:
    """Collaborators that computed fields draw on."""

    content_filter: ContentFilter
    urls: UrlBuilder
    config: ScopeConfig


Computation = Callable[[Any, FieldEnv], Any]


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def is_selected(fields: FieldTree, key: str) -> bool:
    """``True`` under unbounded selection or when *key* is requested."""
    return fields is None or key in fields


def is_requested(fields: FieldTree, key: str) -> bool:
    """``True`` only when *key* is named in a concrete selection (opt-in fields)."""
    return fields is not None and key in fields


def sub_fields(fields: FieldTree, key: str) -> FieldTree:
    """Nested selection under *key*; ``None`` when absent or not a mapping."""
    if fields is None:
        return None
    nested = fields.get(key)
    return nested if isinstance(nested, Mapping) else None


def apply_computed(
    entity: Entity,
    fields: FieldTree,
    computations: Mapping[str, Computation],
    env: FieldEnv,
    data: dict[str, Any],
) -> dict[str, Any]:
    """Write every selected computed field of *entity* into *data*."""
    for key, compute in computations.items():
        if is_selected(fields, key):
            data[key] = compute(entity, env)
    return data


# ---------------------------------------------------------------------------
# Shared computations
# ---------------------------------------------------------------------------

def meta_title(entity: Entity, env: FieldEnv) -> Optional[str]:
    return entity.get("meta_title") or entity.get("title")


def filtered_content(entity: Entity, env: FieldEnv) -> str:
    return env.content_filter.filter(entity.get("content"))


def description_from(html: Optional[str]) -> str:
    return html_to_text(html)[:META_DESCRIPTION_LENGTH].rstrip()


def meta_description(entity: Entity, env: FieldEnv) -> str:
    return entity.get("meta_description") or description_from(filtered_content(entity, env))


def featured_image(entity: Entity, env: FieldEnv) -> Optional[str]:
    return image_url(entity.get("featured_img"), env)


def image_url(path: Optional[str], env: FieldEnv) -> Optional[str]:
    """Media URL of a stored image path; absolute URLs pass through."""
    if not path:
        return None
    if path.startswith(("http://", "https://", "//")):
        return path
    return env.urls.media_url(path)


def entity_url(entity_type: str) -> Computation:
    """Computation returning the permalink of an *entity_type* entity."""

    def _url(entity: Entity, env: FieldEnv) -> str:
        return env.urls.entity_url(entity_type, entity.get("identifier"))

    _url.__name__ = f"{entity_type}_url"
    return _url
