"""notionpub -- publish Markdown documents as Notion database pages.

Public re-exports
-----------------

* **Client:** :class:`AsyncNotionpubClient`
* **Conversion:** :func:`markdown_to_blocks`, :class:`MarkdownToBlocksConverter`
* **Publishing:** :class:`BlockPublisher`, :func:`format_database_id`
* **Configuration:** :class:`NotionpubConfig`
* **Errors:** Every :class:`NotionpubError` subclass and :class:`ErrorCode`
* **Models:** Block tree types and result dataclasses

Usage::

    from notionpub import markdown_to_blocks

    blocks = markdown_to_blocks("# Title\\n- a\\n  - b")
    payload = [block.to_notion() for block in blocks]
"""

from __future__ import annotations

# ── Client ──────────────────────────────────────────────────────────────
from notionpub.async_client import AsyncNotionpubClient

# ── Configuration ───────────────────────────────────────────────────────
from notionpub.config import NotionpubConfig

# ── Conversion ──────────────────────────────────────────────────────────
from notionpub.converter import MarkdownToBlocksConverter, extract_title, markdown_to_blocks

# ── Errors ──────────────────────────────────────────────────────────────
from notionpub.errors import (
    ErrorCode,
    NotionpubError,
    NotionpubNetworkError,
    NotionpubUploadError,
    NotionpubValidationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from notionpub.models import (
    BlockNode,
    BlockType,
    ConversionResult,
    ConversionWarning,
    PublishResult,
    RichTextSpan,
    blocks_to_notion,
)

# ── Publishing ──────────────────────────────────────────────────────────
from notionpub.publisher import BlockPublisher, format_database_id, validate_database_id

__all__ = [
    # Client
    "AsyncNotionpubClient",
    # Configuration
    "NotionpubConfig",
    # Conversion
    "MarkdownToBlocksConverter",
    "extract_title",
    "markdown_to_blocks",
    # Publishing
    "BlockPublisher",
    "format_database_id",
    "validate_database_id",
    # Errors
    "ErrorCode",
    "NotionpubError",
    "NotionpubNetworkError",
    "NotionpubUploadError",
    "NotionpubValidationError",
    # Models
    "BlockNode",
    "BlockType",
    "ConversionResult",
    "ConversionWarning",
    "PublishResult",
    "RichTextSpan",
    "blocks_to_notion",
]
