"""Template directive expansion for stored rich-text content.

Stored content may embed directives such as::

    <img src="{{media url="wysiwyg/cover.jpg"}}">
    <a href="{{store url="contact"}}">Contact</a>
    <img src="{{view url="images/logo.svg"}}">

:class:`ContentFilter` turns them into absolute URLs.  ``{{view}}`` resolves
against a theme, so its output depends on the active design (see
:mod:`blog_backend.content.design`).  Directives we cannot render (widgets,
blocks) are dropped.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from bs4 import BeautifulSoup

from blog_backend.content.design import AREA_FRONTEND, Theme, default_theme, get_current_design
from blog_backend.content.urls import UrlBuilder

_DIRECTIVE = re.compile(r"\{\{\s*(\w+)\b(.*?)\}\}", re.DOTALL)
_PARAM = re.compile(r"""(\w+)\s*=\s*(?:"([^"]*)"|'([^']*)'|(\S+))""")
_WHITESPACE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _parse_params(raw: str) -> dict[str, str]:
    params: dict[str, str] = {}
    for m in _PARAM.finditer(raw):
        value = next((g for g in m.group(2, 3, 4) if g is not None), "")
        params[m.group(1)] = value
    return params


# ---------------------------------------------------------------------------
# HTML helpers
# ---------------------------------------------------------------------------

def html_to_text(html: Optional[str]) -> str:
    """Plain text of *html* with runs of whitespace collapsed."""
    if not html:
        return ""
    text = BeautifulSoup(html, "html.parser").get_text(separator=" ")
    return _WHITESPACE.sub(" ", text).strip()


def first_image_src(html: Optional[str]) -> Optional[str]:
    """``src`` of the first ``<img>`` in *html*, or ``None``."""
    if not html:
        return None
    img = BeautifulSoup(html, "html.parser").find("img", src=True)
    return img["src"] if img is not None else None


def truncate_text(text: str, length: int, ellipsis: str = "...") -> str:
    """Cut *text* to at most *length* characters on a word boundary."""
    if length <= 0 or len(text) <= length:
        return text
    cut = text[:length]
    space = cut.rfind(" ")
    if space > 0:
        cut = cut[:space]
    return cut.rstrip() + ellipsis


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class ContentFilter:
    """Expands ``{{directive ...}}`` markup into render-ready HTML."""

    def __init__(self, urls: UrlBuilder) -> None:
        self.urls = urls
        self._handlers: dict[str, Callable[[dict[str, str], Theme], str]] = {
            "media": self._media,
            "store": self._store,
            "view": self._view,
        }

    def _media(self, params: dict[str, str], theme: Theme) -> str:
        return self.urls.media_url(params.get("url", ""))

    def _store(self, params: dict[str, str], theme: Theme) -> str:
        if "direct_url" in params:
            return self.urls.store_url(params["direct_url"])
        path = params.get("url", "")
        # `{{store url="a/b"}}` routes render with a trailing slash
        return self.urls.store_url(path.rstrip("/") + "/") if path else self.urls.store_url()

    def _view(self, params: dict[str, str], theme: Theme) -> str:
        return self.urls.static_url(params.get("url", ""), theme.theme_path)

    def resolve_theme(self, theme: Optional[Theme] = None) -> Theme:
        """Explicit *theme*, else the emulated frontend theme, else the default."""
        if theme is not None:
            return theme
        design = get_current_design()
        if design.area == AREA_FRONTEND and design.theme is not None:
            return design.theme
        return default_theme()

    def filter(self, content: Optional[str], theme: Optional[Theme] = None) -> str:
        """Return *content* with every directive expanded."""
        if not content:
            return ""
        active_theme = self.resolve_theme(theme)

        def _replace(match: re.Match[str]) -> str:
            handler = self._handlers.get(match.group(1).lower())
            if handler is None:
                return ""
            return handler(_parse_params(match.group(2)), active_theme)

        return _DIRECTIVE.sub(_replace, content)
