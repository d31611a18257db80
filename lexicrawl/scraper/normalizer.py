"""Clean-up of scraped definition and example fragments."""

from __future__ import annotations

# Cross-reference marker the dictionary prepends to "see also" glosses.
ARROW = "→"


def normalize(raw: str) -> str:
    """Strip the cross-reference arrow and terminal punctuation from *raw*.

    Only the first arrow is removed.  After trimming whitespace, a trailing
    ``:`` removes every colon in the string and a trailing ``.`` removes
    every period; any other final character is left alone.

    Empty (or whitespace-only) input returns ``""``.
    """
    text = raw.replace(ARROW, "", 1).strip()
    if not text:
        return ""

    if text.endswith(":"):
        text = text.replace(":", "")
    elif text.endswith("."):
        text = text.replace(".", "")

    return text
