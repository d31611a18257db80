"""Entry extraction: turns one ``.entry-body__el`` node into a :class:`WordEntry`."""

from __future__ import annotations

from bs4 import Tag

from lexicrawl.scraper.models import Definition, WordEntry
from lexicrawl.scraper.normalizer import normalize

# ---------------------------------------------------------------------------
# Selectors (relative to the entry-body node)
# ---------------------------------------------------------------------------
HEADWORD = ":scope > div.pos-header > div.di-title"
PART_OF_SPEECH = ":scope > div.pos-header > div.dpos-g > span.dpos"
PRON_UK = ":scope > div.pos-header > span.uk > span.dpron > span.dipa"
PRON_US = ":scope > div.pos-header > span.us > span.dpron > span.dipa"
DEFINITION_BLOCK = "div.sense-body > div.ddef_block"
GLOSS = "div.def"
EXAMPLE = "div.dexamp"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _select_text(node: Tag, selector: str) -> str:
    """Return the concatenated text of every match, or ``""`` when none match."""
    return "".join(match.get_text() for match in node.select(selector))


def _extract_definition(block: Tag) -> Definition | None:
    text = normalize(_select_text(block, GLOSS))
    if not text:
        return None

    definition = Definition(text=text)
    for node in block.select(EXAMPLE):
        example = normalize(node.get_text())
        if example:
            definition.examples.append(example)
    return definition


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_entry(node: Tag) -> WordEntry:
    """Extract the header fields and definitions of one headword block.

    The headword is taken verbatim; secondary header fields are ``""`` when
    absent.  Definitions and their examples keep document order.  Blocks
    whose gloss is empty after normalization are skipped.
    """
    entry = WordEntry(
        word=_select_text(node, HEADWORD),
        part_of_speech=_select_text(node, PART_OF_SPEECH),
        transcription_uk=_select_text(node, PRON_UK),
        transcription_us=_select_text(node, PRON_US),
    )

    for block in node.select(DEFINITION_BLOCK):
        definition = _extract_definition(block)
        if definition is not None:
            entry.definitions.append(definition)

    return entry
