"""Markdown-to-blocks conversion.

:func:`markdown_to_blocks` makes a single forward pass over the lines of a
document.  Bullet lines start a list run handled by
:func:`~notionpub.converter.lists.nest_list`; every other line is handed
to :func:`~notionpub.converter.classifier.classify_line`.  Blank lines and
HTML comments produce nothing.

The pass is pure: no I/O, no randomness, and no exceptions for any string
input.  Oddities in the input are reported as
:class:`~notionpub.models.ConversionWarning` when a warnings list is
supplied.

:class:`MarkdownToBlocksConverter` wraps the pass with configuration,
logging and metrics.
"""

from __future__ import annotations

import json
import sys

from notionpub.config import NOTION_MAX_TEXT_LENGTH, NotionpubConfig
from notionpub.converter.classifier import LIST_ITEM_RE, classify_line, comment_end
from notionpub.converter.indent import measure_indent
from notionpub.converter.lists import nest_list
from notionpub.models import BlockNode, ConversionResult, ConversionWarning
from notionpub.observability import NoopMetricsHook, get_logger

log = get_logger("notionpub.converter")


def markdown_to_blocks(
    markdown: str,
    *,
    limit: int = NOTION_MAX_TEXT_LENGTH,
    warnings: list[ConversionWarning] | None = None,
) -> list[BlockNode]:
    """Convert *markdown* to top-level blocks in document order.

    Parameters
    ----------
    markdown:
        Raw Markdown text.  ``\\r\\n`` line endings are accepted.
    limit:
        Maximum line length before truncation.
    warnings:
        Optional list collecting non-fatal conversion warnings.

    Returns
    -------
    list[BlockNode]
        A new list; empty for empty or blank-only input.
    """
    blocks: list[BlockNode] = []
    lines = markdown.split("\n")
    end = len(lines)
    i = 0

    while i < end:
        stripped = lines[i].strip()

        if not stripped:
            i += 1
            continue

        if stripped.startswith("<!--"):
            i = comment_end(lines, i)
            continue

        if LIST_ITEM_RE.match(stripped):
            block, i = nest_list(
                lines, i, end, measure_indent(lines[i]), 0,
                limit=limit, warnings=warnings,
            )
        else:
            block = classify_line(stripped, limit=limit, warnings=warnings)
            i += 1

        if block is not None:
            blocks.append(block)

    return blocks


class MarkdownToBlocksConverter:
    """Convert Markdown text to Notion blocks using a :class:`NotionpubConfig`.

    Parameters
    ----------
    config:
        Supplies ``max_line_length``, ``metrics`` and
        ``debug_dump_payload``.

    Examples
    --------
    >>> converter = MarkdownToBlocksConverter(NotionpubConfig())
    >>> result = converter.convert("# Hello\\n\\nWorld")
    >>> [block.kind.value for block in result.blocks]
    ['heading_1', 'paragraph']
    """

    def __init__(self, config: NotionpubConfig) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

    def convert(self, markdown: str) -> ConversionResult:
        """Convert *markdown* and collect warnings.

        Returns
        -------
        ConversionResult
            ``blocks`` and ``warnings``.
        """
        warnings: list[ConversionWarning] = []
        blocks = markdown_to_blocks(
            markdown, limit=self._config.max_line_length, warnings=warnings,
        )

        for warning in warnings:
            self._metrics.increment(
                "notionpub.conversion_warnings_total",
                tags={"code": warning.code},
            )

        log.debug(
            "Markdown converted",
            extra={
                "extra_fields": {
                    "op": "convert",
                    "blocks": len(blocks),
                    "warnings": len(warnings),
                }
            },
        )

        result = ConversionResult(blocks=blocks, warnings=warnings)

        if self._config.debug_dump_payload:
            print(
                "[notionpub] Notion blocks payload:",
                json.dumps(result.to_notion(), indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        return result
