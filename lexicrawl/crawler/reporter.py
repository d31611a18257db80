"""Human-readable crawl progress on stdout."""

from __future__ import annotations

import threading
from enum import Enum

from lexicrawl.scraper.models import WordEntry

SEPARATOR = "-" * 40


class Verbosity(str, Enum):
    COUNT = "count"
    TITLE = "title"
    FULL = "full"

    @classmethod
    def parse(cls, value: "str | Verbosity") -> "Verbosity":
        """Accept a member, its name/value (any case) or the legacy ``0/1/2``.

        Raises:
            ValueError: If *value* names no verbosity level.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        legacy = {"0": cls.COUNT, "1": cls.TITLE, "2": cls.FULL}
        if key in legacy:
            return legacy[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(
                f"Unknown verbosity {value!r}. Use: count | title | full"
            ) from None


class ProgressCounter:
    """Process-wide running count of stored entries.  Increment-only."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        return self._value


class ProgressReporter:
    """Print one progress block per stored entry.

    Output for a single entry is emitted under a lock, so blocks from
    concurrent entry workers never interleave.  Reporting has no effect on
    the crawl besides bumping the counter.
    """

    def __init__(self, verbosity: "str | Verbosity" = Verbosity.TITLE) -> None:
        self.verbosity = Verbosity.parse(verbosity)
        self.counter = ProgressCounter()
        self._lock = threading.Lock()

    @property
    def count(self) -> int:
        return self.counter.value

    def report(self, entry: WordEntry) -> int:
        """Count *entry* as collected, print it, and return the new total."""
        with self._lock:
            total = self.counter.increment()
            for line in self._format(entry, total):
                print(line)
        return total

    def summary(self) -> list[str]:
        """Lines printed once the crawl is exhausted."""
        return ["All words are collected!", f"Count of collected words: {self.count}"]

    def _format(self, entry: WordEntry, total: int) -> list[str]:
        count_line = f"Count of collected words: {total}"

        if self.verbosity is Verbosity.COUNT:
            return [count_line]
        if self.verbosity is Verbosity.TITLE:
            return [f"{count_line}\t\t# Collected: {entry.word}"]

        lines = [
            count_line,
            f"Title: {entry.word}",
            f"Part of speech: {entry.part_of_speech}",
            f"Pronunciation UK: {entry.transcription_uk}",
            f"Pronunciation US: {entry.transcription_us}",
        ]
        for definition in entry.definitions:
            lines.append(f"Definition: {definition.text}")
            lines.extend(f"\t\t\t • {example}" for example in definition.examples)
        lines.append(SEPARATOR)
        return lines
