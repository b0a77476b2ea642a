"""Decide which block a single trimmed Markdown line becomes.

Classification is an ordered rule table: each entry pairs a compiled
pattern with a builder, and the first pattern that matches decides the
block.

Bullet lines (``- item`` / ``* item``) are routed to
:func:`notionpub.converter.lists.nest_list` before they reach this module.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from notionpub.config import NOTION_MAX_TEXT_LENGTH
from notionpub.converter.inline import format_inline
from notionpub.models import BlockNode, BlockType, ConversionWarning

ELLIPSIS = "..."

LIST_ITEM_RE = re.compile(r"^[-*]\s")
"""A bullet list item: ``-`` or ``*`` followed by whitespace."""

# An emoji (optionally with variation selector / ZWJ / skin tone) followed
# by a short bold title, e.g. ``🎮 **Level design**``.
_BANNER_RE = re.compile(
    r"^[\u2600-\u27bf\U0001f000-\U0001faff]"
    r"[\ufe0f\u200d\U0001f3fb-\U0001f3ff]*"
    r"\s*\*\*[^*]{1,80}\*\*$"
)


# ---------------------------------------------------------------------------
# Line helpers
# ---------------------------------------------------------------------------

def truncate_line(
    line: str,
    limit: int = NOTION_MAX_TEXT_LENGTH,
    warnings: list[ConversionWarning] | None = None,
) -> str:
    """Cut *line* to *limit* characters, ending it with ``"..."`` if cut."""
    if len(line) <= limit:
        return line
    if warnings is not None:
        warnings.append(ConversionWarning(
            code="LINE_TRUNCATED",
            message=f"Line of {len(line)} characters truncated to {limit}.",
            context={"length": len(line), "limit": limit},
        ))
    return line[: limit - len(ELLIPSIS)] + ELLIPSIS


def is_skippable(line: str) -> bool:
    """Blank lines and lines opening an HTML comment produce no block."""
    stripped = line.strip()
    return not stripped or stripped.startswith("<!--")


def comment_end(lines: list[str], start: int) -> int:
    """Index just past an HTML comment opened on ``lines[start]``.

    A comment left unclosed only swallows its own line.
    """
    opening = lines[start].strip()
    if "-->" in opening[4:]:
        return start + 1
    for i in range(start + 1, len(lines)):
        if "-->" in lines[i]:
            return i + 1
    return start + 1


def text_block(kind: BlockType, text: str) -> BlockNode | None:
    """Build a block of *kind* from inline-formatted *text*; ``None`` if empty."""
    spans = format_inline(text)
    if not spans:
        return None
    return BlockNode(kind, tuple(spans))


# ---------------------------------------------------------------------------
# Rule builders
# ---------------------------------------------------------------------------

_Builder = Callable[["re.Match[str]"], "BlockNode | None"]


def _prefixed(kind: BlockType) -> _Builder:
    def build(match: re.Match[str]) -> BlockNode | None:
        return text_block(kind, match.string[match.end():].strip())
    return build


def _divider(match: re.Match[str]) -> BlockNode:
    return BlockNode(BlockType.DIVIDER)


def _paragraph(match: re.Match[str]) -> BlockNode | None:
    return text_block(BlockType.PARAGRAPH, match.string)


BLOCK_RULES: list[tuple[re.Pattern[str], _Builder]] = [
    (_BANNER_RE, _paragraph),
    (re.compile(r"^# "), _prefixed(BlockType.HEADING_1)),
    (re.compile(r"^## "), _prefixed(BlockType.HEADING_2)),
    (re.compile(r"^### "), _prefixed(BlockType.HEADING_3)),
    (re.compile(r"^(?:-{3,}|\*{3,}|_{3,})$"), _divider),
    (re.compile(r"^\d+\.\s"), _prefixed(BlockType.NUMBERED_LIST_ITEM)),
    (re.compile(r"^"), _paragraph),
]
"""Ordered ``(pattern, builder)`` pairs; the first matching pattern wins."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def classify_line(
    line: str,
    *,
    limit: int = NOTION_MAX_TEXT_LENGTH,
    warnings: list[ConversionWarning] | None = None,
) -> BlockNode | None:
    """Classify one line and build its block.

    Parameters
    ----------
    line:
        A Markdown line.  Surrounding whitespace is ignored.
    limit:
        Maximum line length before truncation.
    warnings:
        Optional list that collects a ``LINE_TRUNCATED`` warning.

    Returns
    -------
    BlockNode | None
        ``None`` for blank lines, HTML comment lines, and headings with
        no text.
    """
    if is_skippable(line):
        return None
    text = truncate_line(line.strip(), limit, warnings)
    for pattern, build in BLOCK_RULES:
        match = pattern.match(text)
        if match is not None:
            return build(match)
    return None
