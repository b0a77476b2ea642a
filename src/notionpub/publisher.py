"""Upload a block sequence as a new Notion database page.

:meth:`BlockPublisher.publish` runs two phases strictly in order:

1. **Create** -- ``POST /pages`` with the title and the first chunk of
   blocks.
2. **Append** -- one ``PATCH /blocks/{page_id}/children`` per remaining
   chunk, awaiting each before sending the next, with a fixed pause
   between chunks to stay under Notion's rate limit.

Any non-2xx answer raises :class:`~notionpub.errors.NotionpubUploadError`
immediately.  There is no rollback: if an append fails, the page exists
with the chunks sent before the failure.
"""

from __future__ import annotations

import asyncio
import json
import re
from collections.abc import Sequence
from typing import Any

from notionpub.config import NotionpubConfig
from notionpub.errors import NotionpubError, NotionpubUploadError, NotionpubValidationError
from notionpub.models import BlockNode
from notionpub.notion_api.blocks import AsyncBlockAPI
from notionpub.notion_api.pages import AsyncPageAPI, database_parent, title_property
from notionpub.observability import NoopMetricsHook, get_logger
from notionpub.utils.chunk import chunk_children

log = get_logger("notionpub.publisher")

_HEX32_RE = re.compile(r"^[0-9a-fA-F]{32}$")


# ---------------------------------------------------------------------------
# Database ids
# ---------------------------------------------------------------------------

def format_database_id(raw: str) -> str:
    """Return *raw* in dashed ``8-4-4-4-12`` UUID form.

    Ids that already contain a dash, or are not exactly 32 characters, are
    returned unchanged (apart from surrounding whitespace).

    >>> format_database_id("2d7d040b425c8028a1a9f489c2e0657e")
    '2d7d040b-425c-8028-a1a9-f489c2e0657e'
    """
    value = raw.strip()
    if "-" in value or len(value) != 32:
        return value
    return f"{value[:8]}-{value[8:12]}-{value[12:16]}-{value[16:20]}-{value[20:]}"


def validate_database_id(raw: str) -> None:
    """Raise :class:`NotionpubValidationError` unless *raw* is 32 hex digits.

    Dashes are ignored, so both the compact and the UUID form are accepted.
    """
    if not raw or not raw.strip():
        raise NotionpubValidationError(
            message="Database id is empty",
            context={"field": "database_id", "value": raw},
        )
    if not _HEX32_RE.match(raw.strip().replace("-", "")):
        raise NotionpubValidationError(
            message=f"Database id {raw!r} is not a 32-digit hex identifier",
            context={"field": "database_id", "value": raw},
        )


# ---------------------------------------------------------------------------
# Publisher
# ---------------------------------------------------------------------------

def _serialise(blocks: Sequence[BlockNode | dict[str, Any]]) -> list[dict[str, Any]]:
    return [b.to_notion() if isinstance(b, BlockNode) else b for b in blocks]


class BlockPublisher:
    """Create a database page and fill it with blocks in ordered chunks.

    Parameters
    ----------
    pages:
        Page API used for the create request.
    blocks:
        Block API used for the append requests.
    config:
        Supplies ``chunk_size``, ``chunk_pacing_seconds``,
        ``title_property`` and ``metrics``.
    """

    def __init__(
        self,
        pages: AsyncPageAPI,
        blocks: AsyncBlockAPI,
        config: NotionpubConfig,
    ) -> None:
        self._pages = pages
        self._blocks = blocks
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

    async def publish(
        self,
        target_id: str,
        blocks: Sequence[BlockNode | dict[str, Any]],
        title: str,
    ) -> str:
        """Create a page titled *title* in database *target_id* holding *blocks*.

        Parameters
        ----------
        target_id:
            Database id, compact or dashed.
        blocks:
            Top-level blocks in document order, as :class:`BlockNode` or
            already-serialised dicts.
        title:
            Value for the database's title property.

        Returns
        -------
        str
            The page URL reported by Notion (``""`` if absent).

        Raises
        ------
        NotionpubUploadError
            If the create or any append request fails, or the create
            response carries no page id.  After a failed append the page
            exists but is incomplete.
        NotionpubNetworkError
            On transport failures.
        """
        payload = _serialise(blocks)
        batches = chunk_children(payload, self._config.chunk_size)
        first = batches[0] if batches else []

        try:
            page = await self._pages.create(
                parent=database_parent(format_database_id(target_id)),
                properties=title_property(self._config.title_property, title),
                children=first,
            )
        except NotionpubError:
            self._metrics.increment("notionpub.upload_failures_total", tags={"stage": "create"})
            raise

        page_id = page.get("id")
        if not page_id:
            self._metrics.increment("notionpub.upload_failures_total", tags={"stage": "create"})
            raise NotionpubUploadError(
                "Notion create response did not include a page id",
                status_code=200,
                body=json.dumps(page, default=str, ensure_ascii=False),
                context={"stage": "create"},
            )
        page_url = page.get("url", "")
        sent = len(first)
        self._metrics.increment("notionpub.blocks_published_total", value=sent)

        log.info(
            "Page created",
            extra={
                "extra_fields": {
                    "op": "publish",
                    "page_id": page_id,
                    "blocks": sent,
                    "blocks_total": len(payload),
                }
            },
        )

        remaining = batches[1:]
        for index, batch in enumerate(remaining):
            try:
                await self._blocks.append_children(page_id, batch)
            except NotionpubError:
                self._metrics.increment(
                    "notionpub.upload_failures_total", tags={"stage": "append"},
                )
                log.error(
                    "Append failed; page left incomplete",
                    extra={
                        "extra_fields": {
                            "op": "publish",
                            "page_id": page_id,
                            "blocks_stored": sent,
                            "blocks_total": len(payload),
                        }
                    },
                )
                raise

            sent += len(batch)
            self._metrics.increment("notionpub.blocks_published_total", value=len(batch))
            log.debug(
                "Blocks appended",
                extra={
                    "extra_fields": {
                        "op": "publish",
                        "page_id": page_id,
                        "chunk": index + 1,
                        "blocks": len(batch),
                    }
                },
            )

            if index < len(remaining) - 1:
                await asyncio.sleep(self._config.chunk_pacing_seconds)

        return page_url
