"""notionpub.notion_api -- Notion API transport and endpoint wrappers.

This sub-package provides:

* :mod:`.transport` -- async HTTP transport with auth and typed errors.
* :mod:`.pages` -- Page API wrapper.
* :mod:`.blocks` -- Block API wrapper.
"""

from __future__ import annotations

from .blocks import AsyncBlockAPI
from .pages import AsyncPageAPI, database_parent, title_property
from .transport import AsyncNotionTransport

__all__ = [
    "AsyncBlockAPI",
    "AsyncNotionTransport",
    "AsyncPageAPI",
    "database_parent",
    "title_property",
]
