"""Block API wrapper for the Notion API."""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport


class AsyncBlockAPI:
    """Asynchronous wrapper for the Notion Blocks API.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def append_children(
        self,
        block_id: str,
        children: list[dict[str, Any]],
    ) -> dict[str, Any]:
        """Append child blocks to the end of a page or block.

        Parameters
        ----------
        block_id:
            The UUID of the parent page or block.
        children:
            At most 100 block objects; batch larger lists with
            :func:`notionpub.utils.chunk_children`.

        Returns
        -------
        dict
            The API response containing the appended block objects.
        """
        return await self._transport.request(
            "PATCH", f"/blocks/{block_id}/children", json={"children": children}
        )
