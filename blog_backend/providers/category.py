"""Category data provider."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from blog_backend.db.models import Category
from blog_backend.db.repositories import CategoryRepository
from blog_backend.providers.fields import (
    Computation,
    FieldEnv,
    FieldTree,
    apply_computed,
    entity_url,
    filtered_content,
    meta_description,
    meta_title,
)
from blog_backend.providers.loader import load_active


def parent_category_id(category: Category, env: FieldEnv) -> Optional[int]:
    parents = category.parent_ids
    return parents[-1] if parents else None


def category_level(category: Category, env: FieldEnv) -> int:
    # Root categories have an empty path
    return len(category.parent_ids)


CATEGORY_COMPUTED_FIELDS: Mapping[str, Computation] = {
    "category_url": entity_url("category"),
    "meta_title": meta_title,
    "meta_description": meta_description,
    "filtered_content": filtered_content,
    "parent_category_id": parent_category_id,
    "category_level": category_level,
}


class CategoryDataProvider:
    def __init__(self, category_repository: CategoryRepository, env: FieldEnv) -> None:
        self.category_repository = category_repository
        self.env = env

    def get_data(
        self, category_id: Union[int, str], fields: FieldTree = None
    ) -> dict[str, Any]:
        """Raises :class:`NoSuchEntityError` for missing or inactive categories."""
        category = load_active(self.category_repository, category_id)
        return self.get_dynamic_data(category, fields)

    def get_dynamic_data(
        self, category: Category, fields: FieldTree = None
    ) -> dict[str, Any]:
        return apply_computed(
            category, fields, CATEGORY_COMPUTED_FIELDS, self.env, category.get_data()
        )
