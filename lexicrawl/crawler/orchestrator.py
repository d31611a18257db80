"""Crawl orchestration: wires the stages together and runs them to exhaustion.

``Crawler.run`` seeds the index stage and blocks until no fetch is queued or
in flight in any stage.  There is no explicit "done" page; completion is the
in-flight counter reaching zero.

Errors from every worker funnel into :meth:`Crawler._handle_error`, the one
place that decides between skipping a branch and aborting the crawl.
"""

from __future__ import annotations

import sys
import threading
from typing import Optional

import httpx

from lexicrawl.config import settings
from lexicrawl.crawler.reporter import ProgressReporter
from lexicrawl.crawler.stages import EntryStage, GroupStage, IndexStage, LinkStage, Stage
from lexicrawl.db.words import WordStore
from lexicrawl.errors import ConfigurationError, CrawlError, FetchError, LexicrawlError
from lexicrawl.scraper.fetcher import Fetcher, parse_html
from lexicrawl.scraper.models import CrawlTarget


class Crawler:
    """Four-stage dictionary crawl over one shared fetcher and store.

    Args:
        store: Destination for extracted entries.
        reporter: Progress output and the running entry count.
        fetcher: Page source, restricted to the dictionary's domain.
        site_url: Base for resolving site-relative links.
            Defaults to ``settings.site_url``.
        stage_workers: Pool size of each stage.
            Defaults to ``settings.stage_workers``.
        skip_seen_urls: Fetch each absolute URL at most once.  Off by
            default, so an entry reachable from two group pages is stored
            twice.  Defaults to ``settings.skip_seen_urls``.
    """

    def __init__(
        self,
        store: WordStore,
        reporter: ProgressReporter,
        fetcher: Fetcher,
        site_url: Optional[str] = None,
        stage_workers: Optional[int] = None,
        skip_seen_urls: Optional[bool] = None,
    ) -> None:
        self.store = store
        self.reporter = reporter
        self.fetcher = fetcher
        self.site_url = site_url or settings.site_url
        self.skip_seen_urls = (
            settings.skip_seen_urls if skip_seen_urls is None else skip_seen_urls
        )
        workers = settings.stage_workers if stage_workers is None else stage_workers
        if workers < 1:
            raise ConfigurationError(f"stage_workers must be at least 1, got {workers}")

        self.entry_stage = EntryStage(self, max_workers=workers)
        self.link_stage = LinkStage(self, self.entry_stage, max_workers=workers)
        self.group_stage = GroupStage(self, self.link_stage, max_workers=workers)
        self.index_stage = IndexStage(self, self.group_stage, max_workers=workers)

        self._pending = 0
        self._idle = threading.Condition()
        self._seen: set[str] = set()
        self._seen_lock = threading.Lock()
        self._fatal: Optional[BaseException] = None
        self._aborted = threading.Event()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def aborted(self) -> bool:
        return self._aborted.is_set()

    def run(self, seed_url: Optional[str] = None) -> int:
        """Crawl from *seed_url* until every stage is exhausted.

        Returns:
            The number of entries stored.

        Raises:
            PersistenceError: Re-raised from the worker that hit it; the
                first fatal error stops all further dispatching.
            CrawlError: Wraps any other unexpected worker error.
            KeyboardInterrupt: Propagated after queued fetches are cancelled
                and running workers have stopped.
        """
        try:
            self.index_stage.dispatch(seed_url or settings.seed_url)
            with self._idle:
                self._idle.wait_for(lambda: self._pending == 0 or self.aborted)
        except BaseException:
            self._aborted.set()
            raise
        finally:
            self.close()

        fatal = self._fatal
        if fatal is None:
            return self.reporter.count
        if isinstance(fatal, LexicrawlError):
            raise fatal
        raise CrawlError(f"Crawl stopped by unexpected error: {fatal!r}") from fatal

    def submit(self, stage: Stage, url: str) -> None:
        """Queue *url* on *stage*'s pool (called by the stages themselves)."""
        if self.aborted:
            return
        if self.skip_seen_urls and not self._mark_seen(url):
            return

        target = CrawlTarget(url=url, stage=stage.kind)
        with self._idle:
            self._pending += 1
        try:
            stage.pool.submit(self._visit, stage, target)
        except RuntimeError:
            # The pool was shut down by an abort between the check above and here.
            self._finish()
            if not self.aborted:
                raise

    def close(self) -> None:
        """Shut the stage pools down, cancelling queued fetches after an abort."""
        for stage in (self.index_stage, self.group_stage, self.link_stage, self.entry_stage):
            stage.close(cancel=self.aborted)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _visit(self, stage: Stage, target: CrawlTarget) -> None:
        try:
            if self.aborted:
                return
            raw = self.fetcher.fetch(target.url)
            stage.process(parse_html(raw.html), target)
        except Exception as exc:
            self._handle_error(exc, target)
        finally:
            self._finish()

    def _finish(self) -> None:
        with self._idle:
            self._pending -= 1
            if self._pending == 0:
                self._idle.notify_all()

    def _mark_seen(self, url: str) -> bool:
        """Record *url*; return ``False`` if it was already recorded."""
        with self._seen_lock:
            if url in self._seen:
                return False
            self._seen.add(url)
            return True

    def _handle_error(self, exc: Exception, target: CrawlTarget) -> None:
        """Skip the branch on fetch errors; abort the crawl on anything else."""
        if isinstance(exc, (FetchError, httpx.HTTPError)):
            print(f"[FETCH] {target.stage.value}: {target.url} skipped: {exc}", file=sys.stderr)
            return

        with self._idle:
            if self._fatal is None:
                self._fatal = exc
            self._aborted.set()
            self._idle.notify_all()
        print(f"[CRAWL] Aborting on {target.url}: {exc}", file=sys.stderr)
