"""Markdown to Notion block conversion.

Public API:

- :class:`MarkdownToBlocksConverter` -- config-aware conversion with warnings.
- :func:`markdown_to_blocks` -- the pure line-scanning pass.
- :func:`classify_line` -- single-line block classification.
- :func:`nest_list` -- bullet list nesting with a two-level ceiling.
- :func:`format_inline` -- bold / link span parsing.
- :func:`measure_indent` -- indentation depth of a raw line.
- :func:`extract_title` -- page title from the first H1.
"""

from notionpub.converter.classifier import classify_line, truncate_line
from notionpub.converter.indent import measure_indent
from notionpub.converter.inline import format_inline
from notionpub.converter.lists import nest_list
from notionpub.converter.md_to_blocks import MarkdownToBlocksConverter, markdown_to_blocks
from notionpub.converter.title import extract_title

__all__ = [
    "MarkdownToBlocksConverter",
    "classify_line",
    "extract_title",
    "format_inline",
    "markdown_to_blocks",
    "measure_indent",
    "nest_list",
    "truncate_line",
]
