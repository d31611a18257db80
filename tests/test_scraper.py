"""Tests for the scraper package: normalizer, extractor and fetcher.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made during ``Fetcher`` tests.
- Extractor tests parse inline HTML fixtures with the same ``parse_html``
  the crawler uses.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from lexicrawl.errors import FetchError, ForbiddenDomainError
from lexicrawl.scraper.extractor import extract_entry
from lexicrawl.scraper.fetcher import Fetcher, parse_html
from lexicrawl.scraper.models import Definition, RawPage, WordEntry
from lexicrawl.scraper.normalizer import normalize

from conftest import ENTRY_HTML


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_TWO_DEFINITIONS_HTML = """\
<div class="pr entry-body__el">
  <div class="pos-header dpos-h">
    <div class="di-title"><span class="hw dhw">bank</span></div>
    <div class="posgram dpos-g"><span class="pos dpos">noun</span></div>
    <span class="uk dpron-i"><span class="pron dpron">/<span class="ipa dipa">bæŋk</span>/</span></span>
    <span class="us dpron-i"><span class="pron dpron">/<span class="ipa dipa">bæŋk</span>/</span></span>
  </div>
  <div class="pos-body">
    <div class="sense-body dsense_b">
      <div class="def-block ddef_block">
        <div class="ddef_h"><div class="def ddef_d db">an organization where people keep their money:</div></div>
        <div class="def-body ddef_b">
          <div class="examp dexamp"><span class="eg deg">I need to go to the bank.</span></div>
          <div class="examp dexamp"><span class="eg deg">The bank lent us the money.</span></div>
        </div>
      </div>
      <div class="def-block ddef_block">
        <div class="ddef_h"><div class="def ddef_d db">→ sloping raised land, especially along the sides of a river.</div></div>
      </div>
    </div>
  </div>
</div>
"""

_NO_UK_HTML = """\
<div class="entry-body__el">
  <div class="pos-header">
    <div class="di-title">colour</div>
    <span class="us"><span class="dpron"><span class="dipa">ˈkʌl.ɚ</span></span></span>
  </div>
</div>
"""


def _entry_node(html: str):
    return parse_html(html).select_one(".entry-body__el")


# ---------------------------------------------------------------------------
# normalize
# ---------------------------------------------------------------------------

class TestNormalize:
    def test_trailing_colon_removed(self) -> None:
        assert normalize("foo:") == "foo"

    def test_all_colons_removed_when_trailing(self) -> None:
        assert normalize("foo:bar:") == "foobar"

    def test_trailing_period_removed(self) -> None:
        assert normalize("foo.") == "foo"

    def test_all_periods_removed_when_trailing(self) -> None:
        assert normalize("e.g. this one.") == "eg this one"

    def test_inner_colon_kept_without_trailing_colon(self) -> None:
        assert normalize("ratio 3:1") == "ratio 3:1"

    def test_colon_rule_leaves_periods(self) -> None:
        assert normalize("e.g. this:") == "e.g. this"

    def test_only_first_arrow_removed(self) -> None:
        assert normalize("a → b") == "a  b"
        assert normalize("a → b → c") == "a  b → c"

    def test_whitespace_trimmed(self) -> None:
        assert normalize("  \n → see also run.\t") == "see also run"

    def test_empty_input_returns_empty(self) -> None:
        assert normalize("") == ""
        assert normalize("   ") == ""
        assert normalize("→") == ""

    @pytest.mark.parametrize(
        "raw",
        ["foo:", "foo:bar:", "foo.", "a → b", "plain text", " e.g. this.", "x"],
    )
    def test_idempotent(self, raw: str) -> None:
        once = normalize(raw)
        assert normalize(once) == once

    @pytest.mark.parametrize(
        ("raw", "once", "twice"),
        [
            ("a.:", "a.", "a"),
            ("a → b → c", "a  b → c", "a  b  c"),
        ],
    )
    def test_second_pass_can_change_result(self, raw: str, once: str, twice: str) -> None:
        # A pass can expose a new trailing "." or leave a second arrow behind.
        assert normalize(raw) == once
        assert normalize(once) == twice


# ---------------------------------------------------------------------------
# extract_entry
# ---------------------------------------------------------------------------

class TestExtractEntry:
    def test_header_fields(self) -> None:
        entry = extract_entry(_entry_node(_TWO_DEFINITIONS_HTML))

        assert isinstance(entry, WordEntry)
        assert entry.word == "bank"
        assert entry.part_of_speech == "noun"
        assert entry.transcription_uk == "bæŋk"
        assert entry.transcription_us == "bæŋk"

    def test_definitions_and_examples_in_document_order(self) -> None:
        entry = extract_entry(_entry_node(_TWO_DEFINITIONS_HTML))

        assert entry.definitions == [
            Definition(
                text="an organization where people keep their money",
                examples=[
                    "I need to go to the bank",
                    "The bank lent us the money",
                ],
            ),
            Definition(
                text="sloping raised land, especially along the sides of a river",
                examples=[],
            ),
        ]

    def test_missing_uk_pronunciation_is_empty(self) -> None:
        entry = extract_entry(_entry_node(_NO_UK_HTML))

        assert entry.word == "colour"
        assert entry.transcription_uk == ""
        assert entry.transcription_us == "ˈkʌl.ɚ"
        assert entry.part_of_speech == ""
        assert entry.definitions == []

    def test_headword_not_normalized(self) -> None:
        html = '<div class="entry-body__el"><div class="pos-header"><div class="di-title"> etc. </div></div></div>'
        assert extract_entry(_entry_node(html)).word == " etc. "

    def test_blank_headword_passed_through(self) -> None:
        html = '<div class="entry-body__el"><div class="pos-header"></div></div>'
        assert extract_entry(_entry_node(html)).word == ""

    def test_empty_gloss_block_skipped(self) -> None:
        html = """\
<div class="entry-body__el">
  <div class="sense-body">
    <div class="ddef_block"><div class="def">  → </div></div>
    <div class="ddef_block"><div class="def">kept.</div></div>
  </div>
</div>
"""
        entry = extract_entry(_entry_node(html))
        assert [d.text for d in entry.definitions] == ["kept"]

    def test_duplicate_examples_kept(self) -> None:
        html = """\
<div class="entry-body__el">
  <div class="sense-body">
    <div class="ddef_block">
      <div class="def">twice:</div>
      <div class="dexamp">Same.</div>
      <div class="dexamp">Same.</div>
    </div>
  </div>
</div>
"""
        entry = extract_entry(_entry_node(html))
        assert entry.definitions[0].examples == ["Same", "Same"]

    def test_nested_header_of_other_entry_ignored(self) -> None:
        # Only the direct pos-header of this block supplies the header fields.
        html = """\
<div class="entry-body__el">
  <div class="pos-header"><div class="di-title">outer</div></div>
  <div class="pos-body"><div class="pos-header"><div class="di-title">inner</div></div></div>
</div>
"""
        assert extract_entry(_entry_node(html)).word == "outer"

    def test_shared_page_fixture(self) -> None:
        entry = extract_entry(_entry_node(ENTRY_HTML))
        assert entry.word == "run"
        assert entry.definitions == [
            Definition(
                text="to move along faster than walking",
                examples=["I can run a mile in five minutes"],
            )
        ]


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------

class TestFetcher:
    def test_successful_fetch_returns_raw_page(self) -> None:
        with respx.mock:
            respx.get("https://dictionary.cambridge.org/x").mock(
                return_value=httpx.Response(200, text="<html>ok</html>")
            )
            with Fetcher(allowed_domain="dictionary.cambridge.org") as fetcher:
                raw = fetcher.fetch("https://dictionary.cambridge.org/x")

        assert isinstance(raw, RawPage)
        assert raw.status_code == 200
        assert raw.html == "<html>ok</html>"

    def test_http_error_raises(self) -> None:
        with respx.mock:
            respx.get("https://dictionary.cambridge.org/missing").mock(
                return_value=httpx.Response(404, text="Not Found")
            )
            with Fetcher(allowed_domain="dictionary.cambridge.org") as fetcher:
                with pytest.raises(httpx.HTTPStatusError):
                    fetcher.fetch("https://dictionary.cambridge.org/missing")

    def test_foreign_domain_rejected_without_request(self) -> None:
        with respx.mock(assert_all_called=False):
            route = respx.get("https://external.com/x").mock(
                return_value=httpx.Response(200, text="")
            )
            with Fetcher(allowed_domain="dictionary.cambridge.org") as fetcher:
                with pytest.raises(ForbiddenDomainError):
                    fetcher.fetch("https://external.com/x")

        assert not route.called

    def test_only_the_exact_host_is_allowed(self) -> None:
        with Fetcher(allowed_domain="dictionary.cambridge.org") as fetcher:
            assert fetcher.is_allowed("https://DICTIONARY.cambridge.org/a")
            assert not fetcher.is_allowed("https://www.dictionary.cambridge.org/a")
            assert not fetcher.is_allowed("https://dictionary.cambridge.org.evil.com/a")
            assert not fetcher.is_allowed("/relative/path")

    @pytest.mark.parametrize(
        "url",
        ["https://dictionary.cambridge.org:abc/x", "https://[bad/x"],
    )
    def test_malformed_url_raises_fetch_error(self, url: str) -> None:
        with respx.mock(assert_all_called=False) as router:
            with Fetcher(allowed_domain="dictionary.cambridge.org") as fetcher:
                with pytest.raises(FetchError, match="Malformed URL"):
                    fetcher.fetch(url)

        assert not router.calls
