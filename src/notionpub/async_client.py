"""Asynchronous notionpub client.

:class:`AsyncNotionpubClient` ties the converter and the publisher
together: it turns Markdown into blocks, picks a page title and uploads
the blocks to a Notion database.

Usage::

    import asyncio
    from notionpub import AsyncNotionpubClient

    async def main():
        async with AsyncNotionpubClient(token="secret_xxx") as client:
            result = await client.publish_markdown(
                database_id="2d7d040b425c8028a1a9f489c2e0657e",
                markdown="# Star Miner\\n\\n- core loop\\n  - mining",
            )
            print(result.url)

    asyncio.run(main())
"""

from __future__ import annotations

from typing import Any

import httpx

from notionpub.config import NotionpubConfig
from notionpub.converter.md_to_blocks import MarkdownToBlocksConverter
from notionpub.converter.title import extract_title
from notionpub.models import ConversionResult, PublishResult
from notionpub.notion_api.blocks import AsyncBlockAPI
from notionpub.notion_api.pages import AsyncPageAPI
from notionpub.notion_api.transport import AsyncNotionTransport
from notionpub.publisher import BlockPublisher, validate_database_id


class AsyncNotionpubClient:
    """Asynchronous Markdown-to-Notion publishing client.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**
    http_client:
        Optional pre-configured :class:`httpx.AsyncClient` handed to the
        transport.
    **kwargs:
        All remaining keyword arguments are forwarded to
        :class:`NotionpubConfig`.
    """

    def __init__(
        self,
        token: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        **kwargs: Any,
    ) -> None:
        self._config = NotionpubConfig(token=token, **kwargs)
        self._transport = AsyncNotionTransport(self._config, client=http_client)
        self._pages = AsyncPageAPI(self._transport)
        self._blocks = AsyncBlockAPI(self._transport)
        self._converter = MarkdownToBlocksConverter(self._config)
        self._publisher = BlockPublisher(self._pages, self._blocks, self._config)

    @property
    def config(self) -> NotionpubConfig:
        return self._config

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def convert(self, markdown: str) -> ConversionResult:
        """Convert Markdown to blocks without touching the network."""
        return self._converter.convert(markdown)

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    def resolve_title(
        self,
        markdown: str,
        title: str | None = None,
        title_from_h1: bool = True,
    ) -> str:
        """Pick the page title and apply ``config.title_template``.

        Precedence: explicit *title*, then the first H1 (when
        *title_from_h1*), then ``config.default_title``.
        """
        effective = title.strip() if title else ""
        if not effective and title_from_h1:
            effective = extract_title(markdown)
        if not effective:
            effective = self._config.default_title
        return self._config.title_template.format(title=effective)

    async def publish_markdown(
        self,
        database_id: str,
        markdown: str,
        title: str | None = None,
        title_from_h1: bool = True,
    ) -> PublishResult:
        """Convert *markdown* and publish it as a new page in *database_id*.

        Parameters
        ----------
        database_id:
            Target database id, compact (32 hex digits) or dashed.
        markdown:
            Raw Markdown text.
        title:
            Page title.  When omitted the first H1 is used (if
            *title_from_h1*), falling back to ``config.default_title``.
        title_from_h1:
            Allow deriving the title from the first level-1 heading.

        Returns
        -------
        PublishResult

        Raises
        ------
        NotionpubValidationError
            If *database_id* is malformed; nothing is sent.
        NotionpubUploadError
            If any request fails.  A failure after the first request
            leaves a partially filled page behind.
        """
        validate_database_id(database_id)

        conversion = self._converter.convert(markdown)
        page_title = self.resolve_title(markdown, title, title_from_h1)

        url = await self._publisher.publish(database_id, conversion.blocks, page_title)

        return PublishResult(
            url=url,
            title=page_title,
            blocks_published=len(conversion.blocks),
            warnings=conversion.warnings,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._transport.close()

    async def __aenter__(self) -> AsyncNotionpubClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
