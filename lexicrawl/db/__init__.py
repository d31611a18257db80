"""Database layer package.

Public re-exports so callers can write::

    from lexicrawl.db import get_connection, init_db, WordStore
"""

from lexicrawl.db.connection import get_connection
from lexicrawl.db.migrations import init_db
from lexicrawl.db.words import WordStore

__all__ = ["get_connection", "init_db", "WordStore"]
