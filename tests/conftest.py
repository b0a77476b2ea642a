"""Shared test fixtures for the notionpub test suite."""

from __future__ import annotations

import pytest

from notionpub.config import NotionpubConfig
from notionpub.converter.md_to_blocks import MarkdownToBlocksConverter


@pytest.fixture
def config() -> NotionpubConfig:
    """Default test configuration with a dummy token and no pacing."""
    return NotionpubConfig(token="test_token_1234", chunk_pacing_seconds=0.0)


@pytest.fixture
def converter(config: NotionpubConfig) -> MarkdownToBlocksConverter:
    """Markdown-to-blocks converter using the default test config."""
    return MarkdownToBlocksConverter(config)
