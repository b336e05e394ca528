"""Centralised settings for the blog data provider.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

Store-scoped switches (related posts enabled, page sizes, permalinks, theme)
are *not* settings: they live in the ``core_config_data`` table and are read
through :class:`blog_backend.db.scope_config.ScopeConfig`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from the package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Workspace / storage
    # ------------------------------------------------------------------
    workspace_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("BLOG_WORKSPACE", Path.home() / ".blog_data")
        )
    )

    @property
    def db_path(self) -> Path:
        """Absolute path to the SQLite database file."""
        return self.workspace_dir / "blog.db"

    @property
    def schema_path(self) -> Path:
        """Absolute path to the schema SQL file bundled with the package."""
        return Path(__file__).resolve().parent / "db" / "schema.sql"

    # ------------------------------------------------------------------
    # Store scope
    # ------------------------------------------------------------------
    store_id: int = field(
        default_factory=lambda: int(os.environ.get("BLOG_STORE_ID", "1"))
    )

    # ------------------------------------------------------------------
    # Field materialization
    # ------------------------------------------------------------------
    related_posts_max_depth: int = field(
        default_factory=lambda: int(os.environ.get("BLOG_RELATED_POSTS_MAX_DEPTH", "3"))
    )
    default_page_size: int = field(
        default_factory=lambda: int(os.environ.get("BLOG_DEFAULT_PAGE_SIZE", "5"))
    )

    # ------------------------------------------------------------------
    # URLs / design
    # ------------------------------------------------------------------
    base_url: str = field(
        default_factory=lambda: os.environ.get("BLOG_BASE_URL", "http://localhost/")
    )
    media_url: str = field(
        default_factory=lambda: os.environ.get("BLOG_MEDIA_URL", "")
    )
    static_url: str = field(
        default_factory=lambda: os.environ.get("BLOG_STATIC_URL", "")
    )
    locale: str = field(
        default_factory=lambda: os.environ.get("BLOG_LOCALE", "en_US")
    )
    default_theme_path: str = field(
        default_factory=lambda: os.environ.get("BLOG_DEFAULT_THEME", "Magento/luma")
    )

    def __post_init__(self) -> None:
        if not self.base_url.endswith("/"):
            self.base_url += "/"
        # Media and static URLs hang off the base URL unless set explicitly
        if not self.media_url:
            self.media_url = f"{self.base_url}media/"
        if not self.static_url:
            self.static_url = f"{self.base_url}static/"

    def ensure_workspace(self) -> None:
        """Create the workspace directory if it does not exist."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton, import this everywhere:
#   from blog_backend.config import settings
settings = Settings()
