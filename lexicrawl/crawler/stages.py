"""The four stage processors of the dictionary crawl.

Each stage owns its worker pool and a reference to the stage it feeds::

    IndexStage (.hbr) → GroupStage (.dil) → LinkStage (.tc-bd) → EntryStage (.entry-body__el)

A stage scans a fetched page for its selector and, for every match in
document order, either dispatches a URL to the next stage or (for
``EntryStage``) extracts, stores and reports the entry.  Matches within one
page are handled sequentially; different pages run concurrently.
"""

from __future__ import annotations

import sys
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from lexicrawl.scraper.extractor import extract_entry
from lexicrawl.scraper.models import CrawlTarget, StageKind

if TYPE_CHECKING:
    from lexicrawl.crawler.orchestrator import Crawler


class Stage:
    """Base stage: a selector, a worker pool and the next stage in the chain."""

    kind: StageKind
    selector: str

    def __init__(
        self,
        crawler: "Crawler",
        next_stage: Optional["Stage"] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self.crawler = crawler
        self.next_stage = next_stage
        self.pool = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=f"stage-{self.kind.value}",
        )

    def dispatch(self, url: str) -> None:
        """Queue *url* to be fetched and processed by this stage."""
        self.crawler.submit(self, url)

    def process(self, page: BeautifulSoup, target: CrawlTarget) -> None:
        """Run :meth:`handle` on every node of *page* matching the selector."""
        for node in page.select(self.selector):
            if self.crawler.aborted:
                break
            self.handle(node, target)

    def handle(self, node: Tag, target: CrawlTarget) -> None:
        raise NotImplementedError

    def close(self, cancel: bool = False) -> None:
        """Wait for running workers; with *cancel*, drop queued ones first."""
        self.pool.shutdown(wait=True, cancel_futures=cancel)


class _LinkFollowingStage(Stage):
    """A stage whose matches are links into the next stage."""

    def resolve(self, href: str) -> Optional[str]:
        """Return the absolute URL to follow for *href*, or ``None`` to skip it.

        Raises:
            ValueError: If *href* cannot be parsed as a URL.
        """
        if not href:
            return None
        return urljoin(self.crawler.site_url, href)

    def handle(self, node: Tag, target: CrawlTarget) -> None:
        href = (node.get("href") or "").strip()
        try:
            url = self.resolve(href)
        except ValueError as exc:
            print(
                f"[FETCH] {self.kind.value}: malformed href {href!r} on {target.url} skipped: {exc}",
                file=sys.stderr,
            )
            return
        if url is not None and self.next_stage is not None:
            self.next_stage.dispatch(url)


class IndexStage(_LinkFollowingStage):
    """Seed page: one ``.hbr`` link per letter of the alphabet."""

    kind = StageKind.INDEX
    selector = ".hbr"


class GroupStage(_LinkFollowingStage):
    """Letter page: ``.dil`` links to the word groups of that letter."""

    kind = StageKind.GROUP
    selector = ".dil"


class LinkStage(_LinkFollowingStage):
    """Group page: ``.tc-bd`` links to individual entry pages.

    Fully-qualified hrefs point at other dictionaries or external sites and
    are never followed; only site-relative paths are.
    """

    kind = StageKind.LINK
    selector = ".tc-bd"

    def resolve(self, href: str) -> Optional[str]:
        parsed = urlparse(href)
        if not href or parsed.scheme or parsed.netloc:
            return None
        return urljoin(self.crawler.site_url, href)


class EntryStage(Stage):
    """Entry page: every ``.entry-body__el`` block is one headword entry."""

    kind = StageKind.ENTRY
    selector = ".entry-body__el"

    def handle(self, node: Tag, target: CrawlTarget) -> None:
        entry = extract_entry(node)
        self.crawler.store.save(entry)
        self.crawler.reporter.report(entry)
