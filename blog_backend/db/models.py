"""Entity models for the blog read model.

These are plain Python objects – not ORM models.  Scalar columns live in
``data`` exactly as they came out of the row; relationships are resolved on
demand through the repository that loaded the entity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Optional

if TYPE_CHECKING:
    from blog_backend.db.repositories import (
        PostCollection,
        PostRepository,
        ProductCollection,
    )


@dataclass
class Entity:
    entity_type: ClassVar[str] = "entity"

    id: Optional[int] = None
    data: dict[str, Any] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------
    @property
    def is_active(self) -> bool:
        """``False`` for inactive rows and for entities that failed to load."""
        return self.id is not None and bool(self.data.get("is_active"))

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def get_data(self) -> dict[str, Any]:
        """Return a shallow copy of the base scalar attributes."""
        return dict(self.data)


@dataclass
class Tag(Entity):
    entity_type: ClassVar[str] = "tag"


@dataclass
class Category(Entity):
    entity_type: ClassVar[str] = "category"

    @property
    def parent_ids(self) -> list[int]:
        """Ancestor ids from the materialised ``path`` (``"1/4/9"``), root first."""
        path = self.data.get("path") or ""
        return [int(p) for p in path.split("/") if p]


@dataclass
class Author(Entity):
    entity_type: ClassVar[str] = "author"


@dataclass
class Product(Entity):
    """Foreign catalog entity.  Only the SKU is ever exposed."""

    entity_type: ClassVar[str] = "product"

    @property
    def sku(self) -> str:
        return self.data["sku"]


@dataclass
class Post(Entity):
    entity_type: ClassVar[str] = "post"

    resource: Optional["PostRepository"] = field(
        default=None, repr=False, compare=False
    )

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------
    def _require_resource(self) -> "PostRepository":
        if self.resource is None:
            raise RuntimeError("Post is not bound to a repository")
        return self.resource

    def related_tags(self) -> list[Tag]:
        return self._require_resource().related_tags(self)

    def parent_categories(self) -> list[Category]:
        return self._require_resource().parent_categories(self)

    def author(self) -> Optional[Author]:
        return self._require_resource().author(self)

    def related_posts(self) -> "PostCollection":
        return self._require_resource().related_posts(self)

    def related_products(self) -> "ProductCollection":
        return self._require_resource().related_products(self)
