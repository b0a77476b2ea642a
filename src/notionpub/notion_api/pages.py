"""Page API wrapper for the Notion API.

:class:`AsyncPageAPI` is a thin wrapper around ``POST /pages``.  All HTTP
concerns (auth, errors, metrics) live in the transport.
"""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport


def database_parent(database_id: str) -> dict[str, Any]:
    """Parent object placing a new page in a database."""
    return {"database_id": database_id}


def title_property(name: str, title: str) -> dict[str, Any]:
    """Properties object setting the database title property *name*."""
    return {name: {"title": [{"text": {"content": title}}]}}


class AsyncPageAPI:
    """Asynchronous wrapper for the Notion Pages API.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def create(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        children: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Create a new page.

        Parameters
        ----------
        parent:
            Parent object, e.g. ``{"database_id": "..."}``.
        properties:
            Page properties, e.g.
            ``{"Name": {"title": [{"text": {"content": "Page title"}}]}}``.
        children:
            Optional list of at most 100 block objects for the page body.

        Returns
        -------
        dict
            The created page object (``id``, ``url``, ...).
        """
        body: dict[str, Any] = {
            "parent": parent,
            "properties": properties,
        }
        if children is not None:
            body["children"] = children
        return await self._transport.request("POST", "/pages", json=body)
