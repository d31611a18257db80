"""Shared fixtures: an in-memory store and a mocked four-page dictionary site.

``respx`` patches ``httpx`` at the transport layer, so the crawler's real
:class:`~lexicrawl.scraper.fetcher.Fetcher` runs unchanged while no request
leaves the process.
"""

from __future__ import annotations

import sqlite3
from typing import Generator

import httpx
import pytest
import respx

from lexicrawl.db.connection import get_connection
from lexicrawl.db.migrations import init_db

SITE = "https://dictionary.cambridge.org"
SEED_URL = f"{SITE}/browse/english/"
GROUP_URL = f"{SITE}/browse/english/r/"
LINKS_URL = f"{SITE}/browse/english/r/run-rush/"
ENTRY_URL = f"{SITE}/dictionary/english/run"

INDEX_HTML = """\
<html><body>
  <a class="hbr" href="/browse/english/r/">R</a>
</body></html>
"""

GROUP_HTML = f"""\
<html><body>
  <a class="dil" href="{LINKS_URL}">run ... rush</a>
</body></html>
"""

LINKS_HTML = """\
<html><body>
  <a class="tc-bd" href="/dictionary/english/run">run</a>
  <a class="tc-bd" href="https://external.com/x">run (thesaurus)</a>
  <a class="tc-bd" href="">broken</a>
</body></html>
"""

ENTRY_HTML = """\
<html><body>
<div class="entry-body">
  <div class="pr entry-body__el">
    <div class="pos-header dpos-h">
      <div class="di-title"><span class="hw dhw">run</span></div>
      <div class="posgram dpos-g"><span class="pos dpos">verb</span></div>
      <span class="uk dpron-i"><span class="pron dpron">/<span class="ipa dipa">rʌn</span>/</span></span>
      <span class="us dpron-i"><span class="pron dpron">/<span class="ipa dipa">rʌn</span>/</span></span>
    </div>
    <div class="pos-body">
      <div class="pr dsense">
        <div class="sense-body dsense_b">
          <div class="def-block ddef_block">
            <div class="ddef_h"><div class="def ddef_d db">to move along faster than walking:</div></div>
            <div class="def-body ddef_b">
              <div class="examp dexamp"><span class="eg deg">I can run a mile in five minutes.</span></div>
            </div>
          </div>
        </div>
      </div>
    </div>
  </div>
</div>
</body></html>
"""


@pytest.fixture()
def conn() -> Generator[sqlite3.Connection, None, None]:
    """In-memory connection with the schema initialised."""
    connection = get_connection(db_path=":memory:")  # type: ignore[arg-type]
    init_db(connection)
    yield connection
    connection.close()


@pytest.fixture()
def site() -> Generator[respx.MockRouter, None, None]:
    """Seed → group → entry-link → entry pages, one of each."""
    with respx.mock(assert_all_called=False) as router:
        router.get(SEED_URL).mock(return_value=httpx.Response(200, text=INDEX_HTML))
        router.get(GROUP_URL).mock(return_value=httpx.Response(200, text=GROUP_HTML))
        router.get(LINKS_URL).mock(return_value=httpx.Response(200, text=LINKS_HTML))
        router.get(ENTRY_URL).mock(return_value=httpx.Response(200, text=ENTRY_HTML))
        yield router
