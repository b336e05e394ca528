"""Design (area + theme) context used to resolve theme-relative assets.

The active design is request-local: it lives in a :class:`ContextVar`, so two
requests served concurrently never see each other's emulated theme.
:func:`emulate_design` installs a design for the duration of a ``with`` block
and restores the previous one on every exit path::

    with emulate_design(AREA_FRONTEND, theme):
        html = content_filter.filter(tag.get("content"))
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from blog_backend.config import settings
from blog_backend.exceptions import NoSuchEntityError

logger = logging.getLogger(__name__)

AREA_GLOBAL = "global"
AREA_FRONTEND = "frontend"


@dataclass(frozen=True)
class Theme:
    theme_id: Optional[int]
    theme_path: str
    title: str = ""
    area: str = AREA_FRONTEND


@dataclass(frozen=True)
class DesignState:
    area: str
    theme: Optional[Theme] = None


_current_design: ContextVar[DesignState] = ContextVar(
    "current_design", default=DesignState(AREA_GLOBAL)
)


def get_current_design() -> DesignState:
    """Return the design active for the current request."""
    return _current_design.get()


@contextmanager
def emulate_design(area: str, theme: Optional[Theme] = None) -> Iterator[DesignState]:
    """Install ``(area, theme)`` as the active design inside the block.

    The theme may also be chosen later with :func:`set_design_theme`; either
    way the design active before the block is restored on exit.
    """
    state = DesignState(area=area, theme=theme)
    token = _current_design.set(state)
    logger.debug(
        "design emulation start: area=%s theme=%s",
        area,
        theme.theme_path if theme else None,
    )
    try:
        yield state
    finally:
        _current_design.reset(token)
        logger.debug("design emulation end: restored %s", _current_design.get())


def set_design_theme(theme: Theme) -> DesignState:
    """Switch the theme of the active design, keeping its area."""
    state = DesignState(area=_current_design.get().area, theme=theme)
    _current_design.set(state)
    logger.debug("design theme set: %s", theme.theme_path)
    return state


def default_theme() -> Theme:
    """Fallback theme used when the store has no theme configured."""
    return Theme(theme_id=None, theme_path=settings.default_theme_path)


class ThemeProvider:
    """Loads :class:`Theme` rows from the ``theme`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def get_theme_by_id(self, theme_id: Union[int, str, None]) -> Theme:
        """Return the theme with *theme_id*.

        An unset id (``None`` or empty string) yields :func:`default_theme`.

        Raises:
            NoSuchEntityError: If *theme_id* is set but unknown.
        """
        if theme_id is None or str(theme_id).strip() == "":
            return default_theme()
        row = self.conn.execute(
            "SELECT * FROM theme WHERE theme_id = ?", (theme_id,)
        ).fetchone()
        if row is None:
            raise NoSuchEntityError("theme", theme_id)
        return Theme(
            theme_id=row["theme_id"],
            theme_path=row["theme_path"],
            title=row["theme_title"],
            area=row["area"],
        )
