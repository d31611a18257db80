"""Connection to the lexicon database shared by every entry-stage worker."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from lexicrawl.config import settings


def get_connection(db_path: Optional[Path] = None) -> sqlite3.Connection:
    """Open the lexicon database (``settings.db_path`` unless *db_path* is given).

    Foreign keys are enforced so ``definition`` and ``example`` rows always
    reference a stored parent.  The handle may be used from any thread;
    :class:`~lexicrawl.db.words.WordStore` serialises the writes.  Rows come
    back as :class:`sqlite3.Row`.
    """
    path = db_path or settings.db_path
    if str(path) != ":memory:":
        settings.ensure_workspace()

    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    conn.execute("PRAGMA journal_mode = WAL")
    return conn
