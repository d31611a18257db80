"""Exception types raised by the crawler.

The orchestrator decides abort-vs-continue by exception type: fetch errors
are reported and skipped, everything else stops the crawl.
"""

from __future__ import annotations


class LexicrawlError(Exception):
    """Base class for all crawler errors."""


class FetchError(LexicrawlError):
    """A page could not be retrieved.  Non-fatal: the branch is dropped."""


class ForbiddenDomainError(FetchError):
    """The URL points outside the allowed site."""

    def __init__(self, url: str, allowed_domain: str) -> None:
        super().__init__(f"{url!r} is outside the allowed domain {allowed_domain!r}")
        self.url = url
        self.allowed_domain = allowed_domain


class PersistenceError(LexicrawlError):
    """A word or definition row could not be written.  Fatal."""


class ConfigurationError(LexicrawlError):
    """A setting has an unusable value."""


class CrawlError(LexicrawlError):
    """An unexpected error stopped the crawl; the original is ``__cause__``."""
