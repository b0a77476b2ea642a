"""Derive a page title from the first level-1 heading of a document."""

from __future__ import annotations

import re

_H1_RE = re.compile(r"^#[ \t]+(?P<text>.+?)\s*$", re.MULTILINE)

# Leading pictographs and the joiners/selectors that decorate them.
_LEADING_SYMBOLS_RE = re.compile(
    r"^[\s\u2600-\u27bf\U0001f000-\U0001faff\ufe0f\u200d]+"
)

_BOLD_MARKER_RE = re.compile(r"\*\*(.+?)\*\*")


def extract_title(markdown: str, default: str = "") -> str:
    """Return the text of the first ``# `` heading in *markdown*.

    Leading emoji are dropped and ``**bold**`` markers are unwrapped, so
    ``"# 🎮 **Star Miner** design"`` yields ``"Star Miner design"``.
    *default* is returned when there is no usable heading.
    """
    for match in _H1_RE.finditer(markdown):
        text = _BOLD_MARKER_RE.sub(r"\1", match.group("text"))
        text = _LEADING_SYMBOLS_RE.sub("", text).strip()
        if text:
            return text
    return default
