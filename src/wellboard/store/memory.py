"""In-memory log store, used by replays and tests."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from wellboard.errors import StoreUnavailable
from wellboard.records import Category
from wellboard.store.base import LogStore, RawDocument

logger = logging.getLogger(__name__)


def _sort_key(value: Any) -> tuple[int, str]:
    # Missing order fields sort last in descending order, like a
    # document store that puts nulls at the end of a descending sort.
    if value is None:
        return (0, "")
    return (1, value.isoformat() if hasattr(value, "isoformat") else str(value))


class MemoryLogStore(LogStore):
    """Serve raw documents from a dict keyed by (user_id, category).

    Documents are returned newest first by the category's order field,
    the same contract as the MongoDB store.  ``fail`` makes every read
    of the listed categories raise :class:`StoreUnavailable`.
    """

    def __init__(self) -> None:
        self._docs: dict[tuple[str, Category], list[RawDocument]] = {}
        self.fail: set[Category] = set()
        self.calls: list[tuple[Category, str, int]] = []

    def add(self, user_id: str, category: Category | str, docs: Iterable[RawDocument]) -> None:
        """Append raw documents for one user and category."""
        key = (user_id, Category(category))
        self._docs.setdefault(key, []).extend(docs)

    async def fetch(self, category: Category, user_id: str, limit: int) -> list[RawDocument]:
        category = Category(category)
        self.calls.append((category, user_id, limit))
        if category in self.fail:
            raise StoreUnavailable(category.value, user_id, "simulated failure")

        docs = self._docs.get((user_id, category), [])
        field = category.order_field
        ordered = sorted(
            docs,
            key=lambda d: _sort_key(d.get(field)) if isinstance(d, dict) else (0, ""),
            reverse=True,
        )
        logger.debug(f"Memory store: {min(len(ordered), limit)} {category.value} document(s) for {user_id}")
        return ordered[:limit]
