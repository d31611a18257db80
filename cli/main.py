"""lexicrawl CLI: entry-point for the dictionary crawl.

Usage:
    python cli/main.py --help

Commands:
    crawl      → run the four-stage crawl from the seed URL into the DB
    db init    → create the word / definition / example tables
    db stats   → row counts per table
    db show    → print one stored entry
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from lexicrawl.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import sqlite3
from typing import Optional

import typer

from lexicrawl.config import settings
from lexicrawl.crawler import Crawler, ProgressReporter, Verbosity
from lexicrawl.db import WordStore, get_connection, init_db
from lexicrawl.db.words import count_rows, get_entry
from lexicrawl.errors import LexicrawlError
from lexicrawl.scraper import Fetcher

app = typer.Typer(
    name="lexicrawl",
    help="Cambridge dictionary crawler.",
    no_args_is_help=True,
)

db_app = typer.Typer(help="Database operations.", no_args_is_help=True)
app.add_typer(db_app, name="db")


def _open_db() -> sqlite3.Connection:
    """Connect and initialise the store, exiting with code 1 on failure."""
    try:
        conn = get_connection()
        init_db(conn)
    except (sqlite3.Error, OSError) as exc:
        typer.echo(f"Unable to connect to database: {exc}", err=True)
        raise typer.Exit(1)
    return conn


# ---------------------------------------------------------------------------
# Crawl
# ---------------------------------------------------------------------------
@app.command("crawl")
def crawl(
    verbosity: Optional[str] = typer.Option(
        None, help="Progress output: count | title | full (default from VERBOSITY)."
    ),
    workers: Optional[int] = typer.Option(
        None, min=1, help="Worker pool size of each stage (default from STAGE_WORKERS)."
    ),
    seed: Optional[str] = typer.Option(None, help="Override the seed index URL."),
    skip_seen: Optional[bool] = typer.Option(
        None, "--skip-seen/--no-skip-seen", help="Fetch each URL at most once."
    ),
) -> None:
    """Crawl the dictionary and store every entry found."""
    try:
        reporter = ProgressReporter(verbosity or settings.verbosity)
    except ValueError as exc:
        typer.echo(f"[crawl] {exc}", err=True)
        raise typer.Exit(1)

    conn = _open_db()
    try:
        with Fetcher() as fetcher:
            crawler = Crawler(
                WordStore(conn),
                reporter,
                fetcher,
                stage_workers=workers,
                skip_seen_urls=skip_seen,
            )
            crawler.run(seed)
    except LexicrawlError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1)
    finally:
        conn.close()

    for line in reporter.summary():
        typer.echo(line)


# ---------------------------------------------------------------------------
# DB commands
# ---------------------------------------------------------------------------
@db_app.command("init")
def db_init() -> None:
    """Initialise the SQLite database (create tables if they do not exist)."""
    conn = _open_db()
    conn.close()
    typer.echo(f"[db init] Database ready at {settings.db_path}")


@db_app.command("stats")
def db_stats() -> None:
    """Show how many words, definitions and examples are stored."""
    conn = _open_db()
    try:
        counts = count_rows(conn)
    finally:
        conn.close()
    for table, total in counts.items():
        typer.echo(f"  {table:<11} {total}")


@db_app.command("show")
def db_show(
    word_id: int = typer.Option(..., "--id", help="word.id of the entry."),
) -> None:
    """Print one stored entry with its definitions and examples."""
    conn = _open_db()
    try:
        entry = get_entry(conn, word_id)
    finally:
        conn.close()

    if entry is None:
        typer.echo(f"[db show] No word with id {word_id}.")
        raise typer.Exit(1)

    typer.echo(f"{entry.word}  [{entry.part_of_speech or '-'}]")
    typer.echo(f"  UK /{entry.transcription_uk}/  US /{entry.transcription_us}/")
    for n, definition in enumerate(entry.definitions, start=1):
        typer.echo(f"  {n}. {definition.text}")
        for example in definition.examples:
            typer.echo(f"       • {example}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
