"""Content layer: directive filter, URL builder, design emulation, themes."""

from __future__ import annotations

import sqlite3
import threading

import pytest

from blog_backend.config import settings
from blog_backend.content.design import (
    AREA_FRONTEND,
    AREA_GLOBAL,
    DesignState,
    Theme,
    ThemeProvider,
    emulate_design,
    get_current_design,
    set_design_theme,
)
from blog_backend.content.filter import (
    ContentFilter,
    first_image_src,
    html_to_text,
    truncate_text,
)
from blog_backend.content.urls import UrlBuilder
from blog_backend.db.scope_config import (
    XML_PERMALINK_POST_PREFIX,
    XML_PERMALINK_ROUTE,
    XML_PERMALINK_SUFFIX,
    ScopeConfig,
)
from blog_backend.exceptions import NoSuchEntityError

BLOG_THEME = Theme(theme_id=5, theme_path="Magefan/blog")


@pytest.fixture()
def urls(conn: sqlite3.Connection) -> UrlBuilder:
    return UrlBuilder(ScopeConfig(conn, store_id=1))


@pytest.fixture()
def content_filter(urls: UrlBuilder) -> ContentFilter:
    return ContentFilter(urls)


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

class TestUrlBuilder:
    def test_default_permalinks(self, urls: UrlBuilder) -> None:
        assert urls.entity_url("post", "hello-world") == f"{settings.base_url}blog/post/hello-world"
        assert urls.entity_url("tag", "python") == f"{settings.base_url}blog/tag/python"
        assert urls.entity_url("category", "news") == f"{settings.base_url}blog/category/news"
        assert urls.entity_url("author", "jane") == f"{settings.base_url}blog/author/jane"

    def test_configured_permalinks(self, urls: UrlBuilder, set_config) -> None:
        set_config(XML_PERMALINK_ROUTE, "news")
        set_config(XML_PERMALINK_POST_PREFIX, "article")
        set_config(XML_PERMALINK_SUFFIX, ".html")
        assert urls.entity_url("post", "x") == f"{settings.base_url}news/article/x.html"
        # The suffix only applies to posts
        assert urls.entity_url("tag", "y") == f"{settings.base_url}news/tag/y"

    def test_media_and_static(self, urls: UrlBuilder) -> None:
        assert urls.media_url("/a/b.png") == f"{settings.media_url}a/b.png"
        assert urls.static_url("img/x.svg", "Vendor/theme") == (
            f"{settings.static_url}frontend/Vendor/theme/{settings.locale}/img/x.svg"
        )


# ---------------------------------------------------------------------------
# Directive filter
# ---------------------------------------------------------------------------

class TestContentFilter:
    def test_empty_content(self, content_filter: ContentFilter) -> None:
        assert content_filter.filter(None) == ""
        assert content_filter.filter("") == ""

    def test_plain_content_untouched(self, content_filter: ContentFilter) -> None:
        assert content_filter.filter("<p>Hi</p>") == "<p>Hi</p>"

    def test_media_directive(self, content_filter: ContentFilter) -> None:
        html = content_filter.filter('<img src="{{media url="wysiwyg/a.png"}}">')
        assert html == f'<img src="{settings.media_url}wysiwyg/a.png">'

    def test_media_directive_single_quotes(self, content_filter: ContentFilter) -> None:
        html = content_filter.filter("{{media url='b.png'}}")
        assert html == f"{settings.media_url}b.png"

    def test_store_directives(self, content_filter: ContentFilter) -> None:
        assert content_filter.filter('{{store url="contact"}}') == f"{settings.base_url}contact/"
        assert content_filter.filter('{{store direct_url="page.html"}}') == f"{settings.base_url}page.html"
        assert content_filter.filter('{{store url=""}}') == settings.base_url

    def test_unknown_directive_removed(self, content_filter: ContentFilter) -> None:
        html = content_filter.filter('<p>a{{widget type="Some\\Widget" id="3"}}b</p>')
        assert html == "<p>ab</p>"

    def test_view_directive_uses_default_theme_outside_emulation(
        self, content_filter: ContentFilter
    ) -> None:
        html = content_filter.filter('{{view url="images/x.png"}}')
        assert f"/frontend/{settings.default_theme_path}/" in html

    def test_view_directive_uses_emulated_theme(self, content_filter: ContentFilter) -> None:
        with emulate_design(AREA_FRONTEND, BLOG_THEME):
            html = content_filter.filter('{{view url="images/x.png"}}')
        assert html == f"{settings.static_url}frontend/Magefan/blog/{settings.locale}/images/x.png"

    def test_view_directive_explicit_theme_wins(self, content_filter: ContentFilter) -> None:
        other = Theme(theme_id=9, theme_path="Other/theme")
        with emulate_design(AREA_FRONTEND, BLOG_THEME):
            html = content_filter.filter('{{view url="x.png"}}', theme=other)
        assert "/frontend/Other/theme/" in html


class TestHtmlHelpers:
    def test_html_to_text_collapses_whitespace(self) -> None:
        assert html_to_text("<p>One\n  <b>two</b></p>  <p>three</p>") == "One two three"
        assert html_to_text(None) == ""

    def test_first_image_src(self) -> None:
        html = '<p>x</p><img alt="no src"><img src="a.png"><img src="b.png">'
        assert first_image_src(html) == "a.png"
        assert first_image_src("<p>none</p>") is None
        assert first_image_src(None) is None

    def test_truncate_text(self) -> None:
        assert truncate_text("short", 10) == "short"
        assert truncate_text("one two three four", 9) == "one two..."
        assert truncate_text("anything", 0) == "anything"


# ---------------------------------------------------------------------------
# Design emulation
# ---------------------------------------------------------------------------

class TestEmulateDesign:
    def test_default_design(self) -> None:
        design = get_current_design()
        assert design.area == AREA_GLOBAL
        assert design.theme is None

    def test_restores_after_block(self) -> None:
        before = get_current_design()
        with emulate_design(AREA_FRONTEND, BLOG_THEME) as state:
            assert get_current_design() is state
            assert state.theme == BLOG_THEME
        assert get_current_design() == before

    def test_restores_after_exception(self) -> None:
        before = get_current_design()
        with pytest.raises(RuntimeError):
            with emulate_design(AREA_FRONTEND, BLOG_THEME):
                raise RuntimeError("boom")
        assert get_current_design() == before

    def test_nested_emulation_unwinds_in_order(self) -> None:
        other = Theme(theme_id=9, theme_path="Other/theme")
        with emulate_design(AREA_FRONTEND, BLOG_THEME):
            with emulate_design(AREA_FRONTEND, other):
                assert get_current_design().theme == other
            assert get_current_design().theme == BLOG_THEME

    def test_theme_set_inside_block_is_restored(self) -> None:
        before = get_current_design()
        with emulate_design(AREA_FRONTEND) as state:
            assert state.theme is None
            set_design_theme(BLOG_THEME)
            assert get_current_design() == DesignState(AREA_FRONTEND, BLOG_THEME)
        assert get_current_design() == before

    def test_emulation_is_not_visible_to_other_threads(self) -> None:
        seen = []
        with emulate_design(AREA_FRONTEND, BLOG_THEME):
            thread = threading.Thread(target=lambda: seen.append(get_current_design()))
            thread.start()
            thread.join()
        assert seen[0].theme is None


class TestThemeProvider:
    def test_get_theme_by_id(self, conn: sqlite3.Connection) -> None:
        theme = ThemeProvider(conn).get_theme_by_id("5")
        assert theme.theme_path == "Magefan/blog"
        assert theme.area == AREA_FRONTEND

    def test_unset_id_returns_default_theme(self, conn: sqlite3.Connection) -> None:
        assert ThemeProvider(conn).get_theme_by_id(None).theme_path == settings.default_theme_path
        assert ThemeProvider(conn).get_theme_by_id("").theme_id is None

    def test_unknown_id_raises(self, conn: sqlite3.Connection) -> None:
        with pytest.raises(NoSuchEntityError):
            ThemeProvider(conn).get_theme_by_id(404)
