"""URL construction for blog entities, media files and static assets."""

from __future__ import annotations

from typing import Optional

from blog_backend.config import Settings, settings as default_settings
from blog_backend.db import scope_config as cfg
from blog_backend.db.scope_config import ScopeConfig

# Permalink prefix per entity type: (config path, fallback)
_PREFIXES = {
    "post": (cfg.XML_PERMALINK_POST_PREFIX, "post"),
    "tag": (cfg.XML_PERMALINK_TAG_PREFIX, "tag"),
    "category": (cfg.XML_PERMALINK_CATEGORY_PREFIX, "category"),
    "author": (cfg.XML_PERMALINK_AUTHOR_PREFIX, "author"),
}


def _join(base: str, path: str) -> str:
    return base.rstrip("/") + "/" + path.lstrip("/")


class UrlBuilder:
    def __init__(self, config: ScopeConfig, settings: Optional[Settings] = None) -> None:
        self.config = config
        self.settings = settings or default_settings

    def store_url(self, path: str = "") -> str:
        return _join(self.settings.base_url, path) if path else self.settings.base_url

    def media_url(self, path: str) -> str:
        return _join(self.settings.media_url, path)

    def static_url(self, path: str, theme_path: str) -> str:
        """``{static}/frontend/{theme}/{locale}/{path}``."""
        return _join(
            self.settings.static_url,
            f"frontend/{theme_path}/{self.settings.locale}/{path.lstrip('/')}",
        )

    def entity_url(self, entity_type: str, identifier: str) -> str:
        """Permalink of a blog entity, e.g. ``{base}blog/post/my-post``."""
        route = self.config.get_value(cfg.XML_PERMALINK_ROUTE) or "blog"
        prefix_path, fallback = _PREFIXES[entity_type]
        prefix = self.config.get_value(prefix_path) or fallback
        suffix = ""
        if entity_type == "post":
            suffix = self.config.get_value(cfg.XML_PERMALINK_SUFFIX) or ""
        parts = [p.strip("/") for p in (route, prefix) if p.strip("/")]
        parts.append(f"{identifier}{suffix}")
        return self.store_url("/".join(parts))
