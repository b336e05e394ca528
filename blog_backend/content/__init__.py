"""Content rendering helpers: directives, URLs and design context."""

from blog_backend.content.design import (
    AREA_FRONTEND,
    Theme,
    ThemeProvider,
    emulate_design,
    get_current_design,
    set_design_theme,
)
from blog_backend.content.filter import ContentFilter
from blog_backend.content.urls import UrlBuilder

__all__ = [
    "AREA_FRONTEND",
    "Theme",
    "ThemeProvider",
    "emulate_design",
    "get_current_design",
    "set_design_theme",
    "ContentFilter",
    "UrlBuilder",
]
