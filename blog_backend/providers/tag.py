"""Tag data provider.

Tag content is filtered under the store's frontend theme: ``get_data`` emulates
the frontend design for the duration of the materialization, then restores
whatever design was active before, also when materialization raises.
"""

from __future__ import annotations

from typing import Any, Mapping, Union

from blog_backend.content.design import (
    AREA_FRONTEND,
    ThemeProvider,
    emulate_design,
    set_design_theme,
)
from blog_backend.db import scope_config as cfg
from blog_backend.db.models import Tag
from blog_backend.db.repositories import TagRepository
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

TAG_COMPUTED_FIELDS: Mapping[str, Computation] = {
    "tag_url": entity_url("tag"),
    "meta_title": meta_title,
    "meta_description": meta_description,
    "filtered_content": filtered_content,
}


class TagDataProvider:
    def __init__(
        self,
        tag_repository: TagRepository,
        env: FieldEnv,
        theme_provider: ThemeProvider,
    ) -> None:
        self.tag_repository = tag_repository
        self.env = env
        self.theme_provider = theme_provider

    def get_data(self, tag_id: Union[int, str]) -> dict[str, Any]:
        """Full data of an active tag, rendered under the store theme.

        Raises:
            NoSuchEntityError: If the tag does not exist or is inactive.
        """
        tag = load_active(self.tag_repository, tag_id)
        with emulate_design(AREA_FRONTEND):
            theme_id = self.env.config.get_value(cfg.XML_DESIGN_THEME_ID)
            set_design_theme(self.theme_provider.get_theme_by_id(theme_id))
            return self.get_dynamic_data(tag)

    def get_dynamic_data(self, tag: Tag, fields: FieldTree = None) -> dict[str, Any]:
        return apply_computed(tag, fields, TAG_COMPUTED_FIELDS, self.env, tag.get_data())
