"""Writes and reads for the ``word`` / ``definition`` / ``example`` tables."""

from __future__ import annotations

import sqlite3
import sys
import threading
from typing import Optional

from lexicrawl.errors import PersistenceError
from lexicrawl.scraper.models import Definition, WordEntry


# ---------------------------------------------------------------------------
# Single-row inserts (no commit; the caller owns the transaction)
# ---------------------------------------------------------------------------

def insert_word(
    conn: sqlite3.Connection,
    word: str,
    part_of_speech: str,
    transcription_uk: str,
    transcription_us: str,
) -> int:
    """Insert a ``word`` row and return its generated id."""
    cursor = conn.execute(
        """
        INSERT INTO word (word, part_of_speech, transcription_uk, transcription_us)
        VALUES (?, ?, ?, ?)
        """,
        (word, part_of_speech, transcription_uk, transcription_us),
    )
    return cursor.lastrowid  # type: ignore[return-value]


def insert_definition(conn: sqlite3.Connection, word_id: int, definition: str) -> int:
    """Insert a ``definition`` row linked to *word_id* and return its id."""
    cursor = conn.execute(
        "INSERT INTO definition (word_id, definition) VALUES (?, ?)",
        (word_id, definition),
    )
    return cursor.lastrowid  # type: ignore[return-value]


def insert_example(conn: sqlite3.Connection, definition_id: int, example: str) -> int:
    """Insert an ``example`` row linked to *definition_id* and return its id."""
    cursor = conn.execute(
        "INSERT INTO example (definition_id, example) VALUES (?, ?)",
        (definition_id, example),
    )
    return cursor.lastrowid  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# Entry-level writer
# ---------------------------------------------------------------------------

class WordStore:
    """Persist whole :class:`WordEntry` objects through one shared connection.

    Each entry is written in a single transaction, parent rows first and in
    document order.  A lock serialises entries coming from concurrent entry
    workers so their transactions never overlap on the shared connection.

    Failure policy:
        * ``word`` / ``definition`` insert fails → the entry is rolled back
          and :class:`~lexicrawl.errors.PersistenceError` is raised.
        * ``example`` insert fails → a warning goes to stderr and the rest of
          the entry is still written.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        self._lock = threading.Lock()

    def save(self, entry: WordEntry) -> int:
        """Write *entry* and return the generated ``word.id``.

        Raises:
            PersistenceError: If the word or one of its definitions cannot be
                inserted.
        """
        with self._lock:
            try:
                with self.conn:
                    word_id = insert_word(
                        self.conn,
                        entry.word,
                        entry.part_of_speech,
                        entry.transcription_uk,
                        entry.transcription_us,
                    )
                    for definition in entry.definitions:
                        self._save_definition(word_id, definition)
            except sqlite3.Error as exc:
                raise PersistenceError(
                    f"Could not store {entry.word!r}: {exc}"
                ) from exc
        return word_id

    def _save_definition(self, word_id: int, definition: Definition) -> None:
        definition_id = insert_definition(self.conn, word_id, definition.text)
        for example in definition.examples:
            try:
                insert_example(self.conn, definition_id, example)
            except sqlite3.Error as exc:
                print(
                    f"[STORE] Example dropped for definition {definition_id}: {exc}",
                    file=sys.stderr,
                )


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def count_rows(conn: sqlite3.Connection) -> dict[str, int]:
    """Return the number of rows in each of the three tables."""
    return {
        table: conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]  # noqa: S608
        for table in ("word", "definition", "example")
    }


def get_entry(conn: sqlite3.Connection, word_id: int) -> Optional[WordEntry]:
    """Rebuild the stored :class:`WordEntry` for *word_id*.

    Definitions and examples come back in insertion (document) order.
    Returns ``None`` if the word does not exist.
    """
    row = conn.execute("SELECT * FROM word WHERE id = ?", (word_id,)).fetchone()
    if row is None:
        return None

    entry = WordEntry(
        word=row["word"],
        part_of_speech=row["part_of_speech"],
        transcription_uk=row["transcription_uk"],
        transcription_us=row["transcription_us"],
    )
    definitions = conn.execute(
        "SELECT id, definition FROM definition WHERE word_id = ? ORDER BY id",
        (word_id,),
    ).fetchall()
    for d in definitions:
        examples = conn.execute(
            "SELECT example FROM example WHERE definition_id = ? ORDER BY id",
            (d["id"],),
        ).fetchall()
        entry.definitions.append(
            Definition(text=d["definition"], examples=[e["example"] for e in examples])
        )
    return entry
