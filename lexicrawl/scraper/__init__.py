"""Scraper package: page fetching, text clean-up and entry extraction."""

from lexicrawl.scraper.extractor import extract_entry
from lexicrawl.scraper.fetcher import Fetcher, parse_html
from lexicrawl.scraper.models import CrawlTarget, Definition, RawPage, StageKind, WordEntry
from lexicrawl.scraper.normalizer import normalize

__all__ = [
    "Fetcher",
    "parse_html",
    "extract_entry",
    "normalize",
    "CrawlTarget",
    "Definition",
    "RawPage",
    "StageKind",
    "WordEntry",
]
