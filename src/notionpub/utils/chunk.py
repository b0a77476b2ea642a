"""Split a block list into request-sized batches.

Notion accepts at most 100 children per ``POST /pages`` or
``PATCH /blocks/{id}/children`` call.
"""

from __future__ import annotations

from typing import TypeVar

from notionpub.config import NOTION_MAX_CHILDREN

T = TypeVar("T")


def chunk_children(blocks: list[T], size: int = NOTION_MAX_CHILDREN) -> list[list[T]]:
    """Split *blocks* into consecutive batches of at most *size* items.

    An empty input returns an empty list (not ``[[]]``).  Order is kept
    across and within batches.

    Raises
    ------
    ValueError
        If *size* is less than 1.

    Examples
    --------
    >>> [len(batch) for batch in chunk_children(list(range(250)))]
    [100, 100, 50]
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")

    if not blocks:
        return []

    return [blocks[i : i + size] for i in range(0, len(blocks), size)]
