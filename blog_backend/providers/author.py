"""Author data provider."""

from __future__ import annotations

from typing import Any, Mapping, Union

from blog_backend.db.models import Author
from blog_backend.db.repositories import AuthorRepository
from blog_backend.providers.fields import (
    Computation,
    FieldEnv,
    FieldTree,
    apply_computed,
    entity_url,
    featured_image,
    filtered_content,
)
from blog_backend.providers.loader import load_active


def author_name(author: Author, env: FieldEnv) -> str:
    return f"{author.get('firstname') or ''} {author.get('lastname') or ''}".strip()


AUTHOR_COMPUTED_FIELDS: Mapping[str, Computation] = {
    "name": author_name,
    "author_url": entity_url("author"),
    "featured_image": featured_image,
    "filtered_content": filtered_content,
}


class AuthorDataProvider:
    def __init__(self, author_repository: AuthorRepository, env: FieldEnv) -> None:
        self.author_repository = author_repository
        self.env = env

    def get_data(self, author_id: Union[int, str], fields: FieldTree = None) -> dict[str, Any]:
        author = load_active(self.author_repository, author_id)
        return self.get_dynamic_data(author, fields)

    def get_dynamic_data(self, author: Author, fields: FieldTree = None) -> dict[str, Any]:
        return apply_computed(author, fields, AUTHOR_COMPUTED_FIELDS, self.env, author.get_data())
