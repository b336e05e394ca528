"""Commands that print the materialized data of a single blog entity."""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

import typer

from blog_backend.db import get_connection, init_db
from blog_backend.exceptions import NoSuchEntityError
from blog_backend.providers import DataProviders, create_providers
from blog_backend.providers.fields import FieldTree

FIELDS_HELP = 'JSON field-selection tree, e.g. \'{"title": null, "tags": null}\'. Omit for all fields.'
STORE_HELP = "Store id whose configuration applies."


def _parse_fields(raw: Optional[str]) -> FieldTree:
    if raw is None:
        return None
    try:
        fields = json.loads(raw)
    except json.JSONDecodeError as exc:
        typer.echo(f"❌ Invalid --fields JSON: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    if fields is not None and not isinstance(fields, dict):
        typer.echo("❌ --fields must be a JSON object or null", err=True)
        raise typer.Exit(code=2)
    return fields


def _show(store: Optional[int], fetch: Callable[[DataProviders], dict[str, Any]]) -> None:
    conn = get_connection()
    init_db(conn)
    try:
        data = fetch(create_providers(conn, store_id=store))
    except NoSuchEntityError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        conn.close()
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


# ---------------------------------------------------------------------------
# post
# ---------------------------------------------------------------------------
post_app = typer.Typer(help="Blog posts.", no_args_is_help=True)


@post_app.command("show")
def post_show(
    post_id: str = typer.Argument(..., help="Post id or URL identifier."),
    fields: Optional[str] = typer.Option(None, "--fields", help=FIELDS_HELP),
    store: Optional[int] = typer.Option(None, "--store", help=STORE_HELP),
) -> None:
    """Print a post as the GraphQL layer would receive it."""
    selection = _parse_fields(fields)
    _show(store, lambda p: p.post.get_data(post_id, selection))


# ---------------------------------------------------------------------------
# tag
# ---------------------------------------------------------------------------
tag_app = typer.Typer(help="Blog tags.", no_args_is_help=True)


@tag_app.command("show")
def tag_show(
    tag_id: str = typer.Argument(..., help="Tag id or URL identifier."),
    store: Optional[int] = typer.Option(None, "--store", help=STORE_HELP),
) -> None:
    """Print the full data of a tag, rendered under the store theme."""
    _show(store, lambda p: p.tag.get_data(tag_id))


# ---------------------------------------------------------------------------
# category
# ---------------------------------------------------------------------------
category_app = typer.Typer(help="Blog categories.", no_args_is_help=True)


@category_app.command("show")
def category_show(
    category_id: str = typer.Argument(..., help="Category id or URL identifier."),
    fields: Optional[str] = typer.Option(None, "--fields", help=FIELDS_HELP),
    store: Optional[int] = typer.Option(None, "--store", help=STORE_HELP),
) -> None:
    """Print a category."""
    selection = _parse_fields(fields)
    _show(store, lambda p: p.category.get_data(category_id, selection))


# ---------------------------------------------------------------------------
# author
# ---------------------------------------------------------------------------
author_app = typer.Typer(help="Blog authors.", no_args_is_help=True)


@author_app.command("show")
def author_show(
    author_id: str = typer.Argument(..., help="Author id or URL identifier."),
    store: Optional[int] = typer.Option(None, "--store", help=STORE_HELP),
) -> None:
    """Print an author."""
    _show(store, lambda p: p.author.get_data(author_id))
