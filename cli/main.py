"""Blog data CLI: inspect what the data providers hand to the GraphQL layer.

Usage:
    python cli/main.py --help

Sub-command groups:
    db        → database setup
    post      → post data (with field selection)
    tag       → tag data (rendered under the store theme)
    category  → category data
    author    → author data
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from blog_backend.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging

import typer

from blog_backend.config import settings
from blog_backend.db import get_connection, init_db
from cli.commands.entities import author_app, category_app, post_app, tag_app

app = typer.Typer(
    name="blog",
    help="Blog data provider CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Configure logging for every sub-command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s | %(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# DB commands
# ---------------------------------------------------------------------------
db_app = typer.Typer(help="Database operations.", no_args_is_help=True)
app.add_typer(db_app, name="db")


@db_app.command("init")
def db_init() -> None:
    """Initialise the SQLite database (create tables if they do not exist)."""
    conn = get_connection()
    init_db(conn)
    conn.close()
    typer.echo(f"[db init] Database ready at {settings.db_path}")


# ---------------------------------------------------------------------------
# Entity commands
# ---------------------------------------------------------------------------
app.add_typer(post_app, name="post")
app.add_typer(tag_app, name="tag")
app.add_typer(category_app, name="category")
app.add_typer(author_app, name="author")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
