"""Category and author data providers."""

from __future__ import annotations

import pytest

from blog_backend.config import settings
from blog_backend.exceptions import NoSuchEntityError
from blog_backend.providers import DataProviders
from blog_backend.providers.author import AUTHOR_COMPUTED_FIELDS
from blog_backend.providers.category import CATEGORY_COMPUTED_FIELDS


class TestCategoryProvider:
    def test_full_data(self, providers: DataProviders) -> None:
        data = providers.category.get_data("1")
        assert set(CATEGORY_COMPUTED_FIELDS) <= set(data)
        assert data["category_url"] == f"{settings.base_url}blog/category/news"
        assert data["meta_description"] == "All the news"
        assert data["parent_category_id"] is None
        assert data["category_level"] == 0

    def test_child_category(self, providers: DataProviders) -> None:
        data = providers.category.get_data("releases", {"parent_category_id": None})
        assert data["parent_category_id"] == 1
        assert "category_url" not in data

    def test_inactive_category_raises(self, providers: DataProviders) -> None:
        with pytest.raises(NoSuchEntityError, match="category not found"):
            providers.category.get_data("3")


class TestAuthorProvider:
    def test_full_data(self, providers: DataProviders) -> None:
        data = providers.author.get_data("jane")
        assert set(AUTHOR_COMPUTED_FIELDS) <= set(data)
        assert data["name"] == "Jane Doe"
        assert data["author_url"] == f"{settings.base_url}blog/author/jane"
        assert data["featured_image"] == f"{settings.media_url}authors/jane.jpg"
        assert data["filtered_content"] == "<p>Bio</p>"

    def test_selection(self, providers: DataProviders) -> None:
        data = providers.author.get_data("1", {"name": None})
        assert data["name"] == "Jane Doe"
        assert "author_url" not in data

    def test_inactive_author_raises(self, providers: DataProviders) -> None:
        with pytest.raises(NoSuchEntityError):
            providers.author.get_data("2")
