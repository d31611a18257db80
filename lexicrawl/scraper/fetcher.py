"""HTTP fetcher restricted to a single dictionary site."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from lexicrawl.config import settings
from lexicrawl.errors import FetchError, ForbiddenDomainError
from lexicrawl.scraper.models import RawPage


def parse_html(html: str) -> BeautifulSoup:
    """Parse *html* into a soup that supports ``select`` / ``select_one``."""
    return BeautifulSoup(html, "html.parser")


class Fetcher:
    """Retrieve pages from exactly one allowed host.

    A single :class:`httpx.Client` is shared by every stage worker; httpx
    clients are safe to use from several threads at once.
    """

    def __init__(
        self,
        allowed_domain: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.allowed_domain = (allowed_domain or settings.allowed_domain).lower()
        self._client = httpx.Client(
            headers={"User-Agent": user_agent or settings.user_agent},
            timeout=timeout if timeout is not None else settings.request_timeout,
            follow_redirects=True,
        )

    def is_allowed(self, url: str) -> bool:
        """Return ``True`` if the host of *url* is exactly the allowed domain.

        Raises:
            ValueError: If *url* cannot be parsed (e.g. a broken IPv6 host).
        """
        return (urlparse(url).hostname or "").lower() == self.allowed_domain

    def fetch(self, url: str) -> RawPage:
        """Fetch *url* and return a :class:`RawPage`.

        Raises:
            ForbiddenDomainError: If *url* is outside the allowed domain.
                No request is made in that case.
            FetchError: If *url* is malformed (bad port, bad host).
            httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
            httpx.TransportError: On connection failures and timeouts.
        """
        try:
            if not self.is_allowed(url):
                raise ForbiddenDomainError(url, self.allowed_domain)
            response = self._client.get(url)
        except (httpx.InvalidURL, ValueError) as exc:
            raise FetchError(f"Malformed URL {url!r}: {exc}") from exc

        response.raise_for_status()
        return RawPage(url=url, html=response.text, status_code=response.status_code)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
