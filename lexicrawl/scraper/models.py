"""Data models for the crawl pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class StageKind(str, Enum):
    """The four link-following stages, in crawl order."""

    INDEX = "index"
    GROUP = "group"
    LINK = "link"
    ENTRY = "entry"


@dataclass(frozen=True)
class CrawlTarget:
    """A discovered URL plus the stage that must process the fetched page."""

    url: str
    stage: StageKind


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass
class Definition:
    """One gloss and its illustrative sentences, in document order."""

    text: str
    examples: List[str] = field(default_factory=list)


@dataclass
class WordEntry:
    """One headword block scraped from an entry page."""

    word: str
    part_of_speech: str = ""
    transcription_uk: str = ""
    transcription_us: str = ""
    definitions: List[Definition] = field(default_factory=list)
