"""Public data models for notionpub.

Conversion produces a list of :class:`BlockNode` trees made of
:class:`RichTextSpan` runs.  Both are plain dataclasses that know how to
serialise themselves to the JSON shape expected by the Notion API via
``to_notion()``.  Results returned by the converter and the client live
here as well.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BlockType(str, Enum):
    """Block kinds the converter can emit.  Values are Notion's ``type`` names."""

    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    DIVIDER = "divider"
    PARAGRAPH = "paragraph"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"


# ---------------------------------------------------------------------------
# Block tree
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RichTextSpan:
    """A contiguous run of text sharing one format: plain, bold, or a link.

    Attributes
    ----------
    content:
        The visible text with markup markers removed.
    bold:
        ``True`` for text that was wrapped in ``**...**``.
    link_url:
        Target of a ``[label](url)`` link, ``None`` otherwise.
    """

    content: str
    bold: bool = False
    link_url: str | None = None

    @property
    def is_plain(self) -> bool:
        return not self.bold and self.link_url is None

    def to_notion(self) -> dict[str, Any]:
        text: dict[str, Any] = {"content": self.content}
        if self.link_url is not None:
            text["link"] = {"url": self.link_url}
        seg: dict[str, Any] = {"type": "text", "text": text}
        if self.bold:
            seg["annotations"] = {"bold": True}
        return seg


@dataclass(frozen=True)
class BlockNode:
    """One typed block of the output document.

    Only :attr:`BlockType.BULLETED_LIST_ITEM` nodes carry ``children``, and
    those children never carry children of their own.  ``DIVIDER`` nodes
    have neither rich text nor children.
    """

    kind: BlockType
    rich_text: tuple[RichTextSpan, ...] = ()
    children: tuple[BlockNode, ...] = ()

    @property
    def plain_text(self) -> str:
        """Concatenated content of all spans."""
        return "".join(span.content for span in self.rich_text)

    def to_notion(self) -> dict[str, Any]:
        """Serialise to a Notion API block object."""
        kind = self.kind.value
        if self.kind is BlockType.DIVIDER:
            return {"object": "block", "type": kind, kind: {}}
        payload: dict[str, Any] = {
            "rich_text": [span.to_notion() for span in self.rich_text],
        }
        if self.children:
            payload["children"] = [child.to_notion() for child in self.children]
        return {"object": "block", "type": kind, kind: payload}

    def walk(self) -> list[BlockNode]:
        """Return this node followed by its children, in document order."""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes


def blocks_to_notion(blocks: list[BlockNode]) -> list[dict[str, Any]]:
    """Serialise a block sequence to Notion API block objects."""
    return [block.to_notion() for block in blocks]


# ---------------------------------------------------------------------------
# Conversion warnings
# ---------------------------------------------------------------------------

@dataclass
class ConversionWarning:
    """A non-fatal issue encountered during Markdown conversion.

    Attributes
    ----------
    code:
        ``"LINE_TRUNCATED"``, ``"LIST_FLATTENED"`` or
        ``"LIST_CONTENT_SKIPPED"``.
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics (usually ``line``).
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class ConversionResult:
    """Output of :meth:`MarkdownToBlocksConverter.convert`.

    Attributes
    ----------
    blocks:
        Top-level blocks in document order.
    warnings:
        Non-fatal issues (truncation, flattening, skipped content).
    """

    blocks: list[BlockNode] = field(default_factory=list)
    warnings: list[ConversionWarning] = field(default_factory=list)

    def to_notion(self) -> list[dict[str, Any]]:
        return blocks_to_notion(self.blocks)


@dataclass
class PublishResult:
    """Result of :meth:`AsyncNotionpubClient.publish_markdown`.

    Attributes
    ----------
    url:
        Public URL of the created page.
    title:
        The title the page was created with.
    blocks_published:
        Number of top-level blocks sent.
    warnings:
        Conversion warnings for the published Markdown.
    """

    url: str
    title: str
    blocks_published: int
    warnings: list[ConversionWarning] = field(default_factory=list)
