"""Crawler package: stage processors, orchestration and progress output."""

from lexicrawl.crawler.orchestrator import Crawler
from lexicrawl.crawler.reporter import ProgressReporter, Verbosity

__all__ = ["Crawler", "ProgressReporter", "Verbosity"]
