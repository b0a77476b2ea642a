"""Nest a run of bullet lines into ``bulleted_list_item`` blocks.

Notion accepts at most two levels of list nesting in one request, so the
tree built here is capped at a top-level item plus one level of children.
Items indented deeper than a child are flattened into further children of
the same top-level item, in source order:

.. code-block:: markdown

    - a
      - b
        - c

becomes ``a`` with children ``[b, c]``.
"""

from __future__ import annotations

from notionpub.config import NOTION_MAX_TEXT_LENGTH
from notionpub.converter.classifier import LIST_ITEM_RE, comment_end, truncate_line
from notionpub.converter.indent import measure_indent
from notionpub.converter.inline import format_inline
from notionpub.models import BlockNode, BlockType, ConversionWarning

MAX_LIST_DEPTH = 1
"""Deepest child level a list item may be placed at (0 = top level)."""


def list_item_text(line: str) -> str | None:
    """Return the text of a bullet line without its marker, or ``None``."""
    stripped = line.strip()
    match = LIST_ITEM_RE.match(stripped)
    if match is None:
        return None
    return stripped[match.end():].strip()


def nest_list(
    lines: list[str],
    start: int,
    end: int,
    parent_indent: int,
    current_depth: int = 0,
    *,
    limit: int = NOTION_MAX_TEXT_LENGTH,
    warnings: list[ConversionWarning] | None = None,
) -> tuple[BlockNode | None, int]:
    """Build the list item at ``lines[start]`` together with its children.

    Parameters
    ----------
    lines:
        All lines of the document.
    start:
        Index of a bullet line.
    end:
        Index one past the last line that may be consumed.
    parent_indent:
        Indent level of the item at *start*; scanning stops at the first
        non-blank line indented at or below it.
    current_depth:
        Nesting level of the item being built.
    limit:
        Maximum text length before truncation.
    warnings:
        Optional list collecting ``LINE_TRUNCATED``, ``LIST_FLATTENED`` and
        ``LIST_CONTENT_SKIPPED`` warnings.

    Returns
    -------
    tuple[BlockNode | None, int]
        The item (``None`` if ``lines[start]`` is not a bullet) and the
        index of the first line not consumed.
    """
    stripped = lines[start].strip()
    if LIST_ITEM_RE.match(stripped) is None:
        return None, start + 1

    # The length limit covers the whole line, marker included.
    text = list_item_text(truncate_line(stripped, limit, warnings)) or ""
    spans = tuple(format_inline(text))
    i = start + 1

    # At the ceiling: anything deeper is left for the caller, which takes
    # it in as a sibling of this item.
    if current_depth >= MAX_LIST_DEPTH:
        return BlockNode(BlockType.BULLETED_LIST_ITEM, spans), i

    children: list[BlockNode] = []
    sibling_indent: int | None = None

    while i < end:
        raw = lines[i]
        if not raw.strip():
            i += 1
            continue

        indent = measure_indent(raw)
        if indent <= parent_indent:
            break

        if raw.strip().startswith("<!--"):
            i = comment_end(lines, i)
            continue

        if not LIST_ITEM_RE.match(raw.strip()):
            if warnings is not None:
                warnings.append(ConversionWarning(
                    code="LIST_CONTENT_SKIPPED",
                    message="Indented non-list line inside a list was skipped.",
                    context={"line": i},
                ))
            i += 1
            continue

        if sibling_indent is not None and indent > sibling_indent:
            if warnings is not None:
                warnings.append(ConversionWarning(
                    code="LIST_FLATTENED",
                    message=(
                        f"List nesting deeper than {MAX_LIST_DEPTH + 1} levels; "
                        "item flattened."
                    ),
                    context={"line": i, "indent": indent},
                ))
        else:
            sibling_indent = indent

        child, i = nest_list(
            lines, i, end, indent, current_depth + 1,
            limit=limit, warnings=warnings,
        )
        if child is not None:
            children.append(child)

    return BlockNode(BlockType.BULLETED_LIST_ITEM, spans, tuple(children)), i
